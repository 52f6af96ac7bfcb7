"""Webhook intake layer.

This package validates inbound submissions, decodes their payloads,
and publishes queue pointers for asynchronous processing.
"""
