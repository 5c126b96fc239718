"""term_palette.core — Foundation layer.

Contains the colour arithmetic, default palette, validation surface,
contrast cache, colour manager, theme file loader and report builder.
This module has NO dependencies on term_palette.commands or term_palette.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
