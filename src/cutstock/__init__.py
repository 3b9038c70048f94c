"""Cutting-stock optimization engine.

Packs rectangular parts onto trimmed boards with guillotine cuts and
reports placements, unplaced parts, utilisation metrics and saw-pass
length per material.
"""

__version__ = "0.1.0"
