"""
Area Selector CLI - terminal tools around the area selector.

Usage:
    areasel-cli watch
    areasel-cli watch --topic areasel/areas/moscow_selector
    areasel-cli show-config config/area_selector.yaml
"""

__version__ = "1.0.0"
