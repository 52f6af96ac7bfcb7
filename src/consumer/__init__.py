"""Queue consumer.

This package turns queued event pointers into normalized readings
and decides whether each message is acknowledged or retried.
"""
