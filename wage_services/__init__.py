"""Wage Catalog Services Package.

This package contains the services of the occupational wage pipeline:
- normalizer: Reads county wage spreadsheets into canonical wage records
- aggregator: Aggregates county records into statewide occupation profiles
- publisher: Writes and loads the JSON catalog artifacts
- catalog: Repository and query engine over the occupation catalog
- negotiation: Salary negotiation calculator
"""

__version__ = "0.1.0"
