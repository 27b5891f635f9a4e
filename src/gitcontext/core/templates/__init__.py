"""
Template processing for gitcontext.

Provides placeholder substitution of per-file metadata and content.
"""

from .renderer import PLACEHOLDERS, PRESETS, FileDescriptor, TemplateRenderer, substitute

__all__ = ['PLACEHOLDERS', 'PRESETS', 'FileDescriptor', 'TemplateRenderer', 'substitute']
