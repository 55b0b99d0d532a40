# =============================================================================
# CPGE/SRM/__init__.py - Source Registry Module
# =============================================================================
#
# Maps a source name (the -s argument, also the output file stem) to the
# SourceProfile that fixes its table length, hue stepping and capacity.
#
# New sources are added as rows in SOURCE_PROFILES; nothing else changes.
#
# Sub-modules:
#   profiles.py  - SourceProfile record, registry table, lookup helpers
# =============================================================================
