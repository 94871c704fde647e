"""
Doctor Connect

Async client for the doctor consultation API: session persistence,
bearer-token requests and user-facing error classification.
"""

__version__ = "0.1.0"
