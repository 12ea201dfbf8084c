"""
Command-line interface for sqlcanvas.
"""

from .main import app, main

__all__ = ["app", "main"]
