"""
Configuration Module

Client configuration settings and utilities.
"""

from doctor_connect.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
