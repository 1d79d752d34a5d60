"""Glyph atlas layout: charsets, rectangle packing, glyph and font geometry, dynamic atlases, bitmap copying and saving."""

__version__ = "1.0.0"