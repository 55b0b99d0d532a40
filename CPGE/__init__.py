# =============================================================================
# Composite Palette Generation Engine (CPGE)
# =============================================================================
#
# Synthesizes fixed-size color palettes that approximate the chroma/luma
# behaviour of an analog composite video signal, as produced by 8-bit era
# video hardware, and writes them out as GIMP palettes and TGA row images.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   caller      → picks a source name, e.g. "composite_18_1x"
#   SRM         → looks up the SourceProfile for that name
#   VTM         → supplies the luma / saturation tables for its length
#   PGM         → walks greys then hues, YIQ → RGB, appends to the Palette
#   PEM         → serializes the Palette to <source>.gpl and <source>.tga
#
# ── ARITHMETIC ────────────────────────────────────────────────────────────────
#   All table and channel math is done in IEEE single precision (numpy
#   float32) with only cos/sin evaluated in double.  Every channel value is
#   therefore bit-identical to the reference palettes.
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   VTM/  Voltage Table Module    - constants + closed-form voltage tables
#   SRM/  Source Registry Module  - name → SourceProfile lookup table
#   PGM/  Palette Generation      - Palette buffer + YIQ assembler
#   PEM/  Palette Export Module   - .gpl and .tga writers
#   PVM/  Palette Verification    - readers, file checker, validation suite
#   palette_gen.py                - command-line entry point
# =============================================================================

__version__ = "1.0.0"
