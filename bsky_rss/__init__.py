"""Bluesky author feed to RSS 2.0 generator."""

__version__ = "1.0.0"
