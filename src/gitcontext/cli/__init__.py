"""
Command-line interface for gitcontext.
"""

from gitcontext import __version__

__all__ = ["__version__"]
