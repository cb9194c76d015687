"""
Aggregator Service

This service groups the normalized county wage records by SOC code and builds
the statewide occupation catalog.

Key responsibilities:
- Read the wage records artifact written by the normalizer
- Compute statewide wage ranges and per-county wage data
- Write the occupations artifact sorted by SOC code
"""

__version__ = "0.1.0"
