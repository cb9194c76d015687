"""
Publisher Service

Serializes the wage records and the aggregated occupation catalog to JSON
artifacts, and loads them back for the serving side.
"""
