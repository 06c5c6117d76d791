"""
TIOBE index service.

Serves the TIOBE programming language popularity index over HTTP,
scraped from tiobe.com with a built-in snapshot as fallback.
"""

__version__ = "0.1.0"
