"""
Normalizer Service

This service reads the per-county occupational wage spreadsheets and
transforms every row into a canonical WageRecord.

Key responsibilities:
- Discover {countykey}_ow.xls files and resolve county names
- Read the sheet rows and map the source headers to canonical keys
- Turn sentinel wage cells into None and normalize vocabulary codes
- Write the flat wage records artifact for the aggregator
"""

__version__ = "0.1.0"
