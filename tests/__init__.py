"""Wage Catalog Test Suite.

This package contains the tests for the wage catalog services.

Test Structure:
- unit/: Tests for individual functions and classes
- unit/services/: Tests grouped by service; CLI and artifact tests that
  touch temporary files are marked `integration`
"""

__version__ = "0.1.0"
