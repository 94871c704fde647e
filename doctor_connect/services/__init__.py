"""
Services

Session persistence and profile restoration for the doctor client.
"""

from .session_store import SessionStore

__all__ = ["SessionStore"]
