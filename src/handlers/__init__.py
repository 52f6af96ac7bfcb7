"""AWS Lambda entrypoints.

This package adapts API Gateway and SQS events onto the receiver
and consumer, building the runtime context once per process.
"""
