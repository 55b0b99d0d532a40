# =============================================================================
# CPGE/PEM/__init__.py - Palette Export Module
# =============================================================================
#
# Serializes a finished Palette.  Both writers only read the palette; each
# reports its own failure (returns False) so a failed .gpl never stops the
# .tga from being attempted, and vice versa.
#
# Modules:
#   gpl_writer.py  - GIMP palette text file  (<source>.gpl)
#   tga_writer.py  - one-row truecolor TGA   (<source>.tga)
# =============================================================================
