"""
Catalog Service

Serves the aggregated occupation catalog: an immutable OccupationRepository
loaded once at startup, and a stateless query engine (search, filters, sort,
pagination) over it.
"""

from .query import OccupationQueryParams, PaginatedOccupations, SortField, SortOrder, query_occupations
from .repository import OccupationRepository

__all__ = [
    'OccupationQueryParams',
    'OccupationRepository',
    'PaginatedOccupations',
    'SortField',
    'SortOrder',
    'query_occupations',
]
