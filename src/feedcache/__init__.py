"""
feedcache - Image cache pre-warming for a feed reader.

Discovers every image referenced by stored feed items and cached article
markup, and fetches each one into the persistent on-disk image cache so
that images are available offline.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "feedcache"
__license__ = "GPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__license__"]
