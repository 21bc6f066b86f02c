"""
recipebox recipe search application.

The package contains the Spoonacular proxy server, the client-side search and
favorites subsystem that drives the pages, and a small command-line interface.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
