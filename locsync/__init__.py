# locsync/__init__.py
"""Sync a translatable-string catalog with a remote localization service."""

__version__ = "1.0.0"
