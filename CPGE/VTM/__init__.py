# =============================================================================
# CPGE/VTM/__init__.py - Voltage Table Module
# =============================================================================
#
# The VTM is the single source of truth for the composite-signal voltage
# model: the literal NES tables, the IRE step tables derived from them, and
# the YIQ coefficients used to turn a (luma, saturation, hue) triple into RGB.
#
# Sub-modules:
#   constants.py       - literal tables and numeric constants
#   voltage_tables.py  - closed-form step tables, one per supported length
# =============================================================================
