"""Command line interface for the DLC converter."""

from .app import main

__all__ = ["main"]
