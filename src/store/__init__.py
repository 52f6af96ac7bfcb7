"""AWS-backed storage layer.

This package persists raw payloads in S3 and normalized readings
and API keys in the shared DynamoDB data table.
"""
