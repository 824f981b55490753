"""
Vercel Python runtime entry point.

Every path is rewritten to this function; the ASGI app does its own routing.
"""

from marketkit_edge.main import app

__all__ = ["app"]
