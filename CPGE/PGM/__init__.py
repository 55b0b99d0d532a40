# =============================================================================
# CPGE/PGM/__init__.py - Palette Generation Module
# =============================================================================
#
# Turns a SourceProfile + VoltageTable into an ordered Palette.
#
# Modules:
#   palette.py    - Color record and the capacity-bounded Palette buffer
#   assembler.py  - SynthesisContext, YIQ → RGB conversion, append order
#
# Constants live in CPGE/VTM/constants.py
# Verification tools live in CPGE/PVM/
# =============================================================================
