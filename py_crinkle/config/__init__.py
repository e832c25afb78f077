"""
Configuration for surface generation.
"""

from .config import Settings, settings

__all__ = ['Settings', 'settings']
