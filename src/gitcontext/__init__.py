"""
gitcontext - flatten a source tree into a single templated context document.

Walks a directory, skips excluded and binary files, and renders every
remaining file through a placeholder template.
"""

__version__ = "1.0.0"
