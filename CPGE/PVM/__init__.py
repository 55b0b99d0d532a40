# =============================================================================
# CPGE/PVM/__init__.py - Palette Verification Module
# =============================================================================
#
# Tools for checking that written palette files match what the generator
# would produce for their source.
#
# Sub-modules:
#   readers.py        - parse .gpl and .tga files back into colors
#   palette_check.py  - file-vs-synthesis checker (CLI + importable)
#   validate.py       - self-validation suite for the whole CPGE stack
# =============================================================================
