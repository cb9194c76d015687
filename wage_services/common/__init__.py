"""
Common utilities shared across the wage catalog services.

This package holds the pieces every service agrees on: the wage data model,
the fixed vocabulary tables (education levels, area types, counties, SOC
groups) and the catalog configuration loader.
"""
