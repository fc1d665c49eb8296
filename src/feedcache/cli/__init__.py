"""
CLI interface module for feedcache.

Provides the Typer-based command-line interface for running and managing
the image cache.
"""

from __future__ import annotations

__all__: list[str] = []
