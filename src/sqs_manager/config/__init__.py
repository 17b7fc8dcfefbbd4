"""
Module: config
Description: Settings for the queue manager.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
