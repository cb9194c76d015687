"""
Catalog Query Engine

Stateless search / filter / sort / paginate over an occupation catalog.

The pipeline runs in a fixed order: SOC group filter, text search, county
filter, education filter, salary filter, sort, then page slicing. The filters
are independent, so the order does not change the filtered set, but it is kept
fixed so results are predictable.

Null handling differs on purpose between stages:
- the salary filter excludes occupations with no statewide median whenever a
  bound is given (they cannot be known to be in range)
- sorting by 'wages' treats a missing median as 0
- sorting by any other field puts missing values last in both directions
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from wage_services.common.models import Occupation

logger = logging.getLogger(__name__)

ALL_COUNTIES = 'All'


class SortField(str, Enum):
    """Sortable catalog fields."""

    SOC_CODE = 'socCode'
    TITLE = 'title'
    EDUCATION_LEVEL = 'educationLevel'
    MEDIAN_WAGE = 'wages'
    ENTRY_SALARY = 'entrySalary'
    MEDIAN_SALARY = 'medianSalary'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


@dataclass(frozen=True)
class OccupationQueryParams:
    """
    Query request.

    `county` of None or 'All' disables the county filter. Unknown sort fields
    or orders raise ValueError here, before any query runs.
    """

    page: int = 1
    page_size: int = 25
    sort_by: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.ASC
    search: Optional[str] = None
    education_level: tuple[str, ...] = ()
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    county: Optional[str] = None
    soc_category: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")
        if self.sort_by is not None and not isinstance(self.sort_by, SortField):
            object.__setattr__(self, 'sort_by', SortField(self.sort_by))
        if not isinstance(self.sort_order, SortOrder):
            object.__setattr__(self, 'sort_order', SortOrder(self.sort_order))
        if not isinstance(self.education_level, tuple):
            object.__setattr__(self, 'education_level', tuple(self.education_level))

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_page_size: int = 25) -> "OccupationQueryParams":
        """Build params from the camelCase request contract."""
        return cls(
            page=int(data.get('page', 1)),
            page_size=int(data.get('pageSize', default_page_size)),
            sort_by=data.get('sortBy') or None,
            sort_order=data.get('sortOrder') or SortOrder.ASC,
            search=data.get('search'),
            education_level=tuple(data.get('educationLevel') or ()),
            min_salary=data.get('minSalary'),
            max_salary=data.get('maxSalary'),
            county=data.get('county'),
            soc_category=data.get('socCategory'),
        )

    @property
    def selected_county(self) -> Optional[str]:
        """The county to filter on, or None when all counties are selected."""
        if not self.county or self.county == ALL_COUNTIES:
            return None
        return self.county


@dataclass(frozen=True)
class PageMeta:
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            'page': self.page,
            'pageSize': self.page_size,
            'totalCount': self.total_count,
            'totalPages': self.total_pages,
            'hasNextPage': self.has_next_page,
            'hasPreviousPage': self.has_previous_page,
        }


@dataclass(frozen=True)
class PaginatedOccupations:
    """Query response: one page of occupations plus pagination metadata."""

    data: list[Occupation] = field(default_factory=list)
    meta: Optional[PageMeta] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'data': [occupation.to_dict() for occupation in self.data],
            'meta': self.meta.to_dict() if self.meta else None,
        }


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def filter_by_soc_category(occupations: list[Occupation], soc_category: Optional[str]) -> list[Occupation]:
    """Keep codes in a SOC major group (e.g. '15' keeps '15-xxxx')."""
    if not soc_category:
        return occupations
    prefix = f"{soc_category}-"
    return [o for o in occupations if o.soc_code.startswith(prefix)]


def filter_by_search(occupations: list[Occupation], search: Optional[str]) -> list[Occupation]:
    """Case-insensitive match on title, or substring match on SOC code."""
    if not search:
        return occupations
    search_lower = search.lower()
    return [
        o for o in occupations
        if search_lower in o.title.lower() or search_lower in o.soc_code
    ]


def filter_by_county(occupations: list[Occupation], county: Optional[str]) -> list[Occupation]:
    """Keep occupations with data for the county (exact, case-sensitive name match)."""
    if not county or county == ALL_COUNTIES:
        return occupations
    return [o for o in occupations if any(c.county == county for c in o.by_county)]


def filter_by_education(occupations: list[Occupation], levels: Sequence[str]) -> list[Occupation]:
    if not levels:
        return occupations
    wanted = set(levels)
    return [o for o in occupations if o.education_level in wanted]


def filter_by_salary(
    occupations: list[Occupation],
    min_salary: Optional[float],
    max_salary: Optional[float],
) -> list[Occupation]:
    """
    Filter on the statewide annual median.

    When either bound is given, occupations without a median are excluded.
    """
    if min_salary is None and max_salary is None:
        return occupations

    results = []
    for occupation in occupations:
        median = occupation.statewide.annual.median
        if median is None:
            continue
        if min_salary is not None and median < min_salary:
            continue
        if max_salary is not None and median > max_salary:
            continue
        results.append(occupation)
    return results


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

SortKey = Callable[[Occupation], Any]


def _text_key(value: Optional[str]) -> Optional[tuple[str, str]]:
    if value is None:
        return None
    return (value.casefold(), value)


def _county_or_statewide(occupation: Occupation, county: Optional[str], attribute: str) -> Optional[float]:
    """A wage from the selected county, falling back to the statewide value."""
    if county:
        county_data = next((c for c in occupation.by_county if c.county == county), None)
        if county_data is not None:
            value = getattr(county_data.wages.annual, attribute)
            if value is not None:
                return value
    return getattr(occupation.statewide.annual, attribute)


def sort_key_for(sort_by: SortField, county: Optional[str] = None) -> SortKey:
    """
    Key function for a sort field. A key of None means "missing".

    Args:
        sort_by: Field to sort on
        county: Selected county for the county-aware salary fields
    """
    if sort_by is SortField.SOC_CODE:
        return lambda o: _text_key(o.soc_code)
    if sort_by is SortField.TITLE:
        return lambda o: _text_key(o.title)
    if sort_by is SortField.EDUCATION_LEVEL:
        return lambda o: _text_key(o.education_level)
    if sort_by is SortField.MEDIAN_WAGE:
        return lambda o: o.statewide.annual.median or 0
    if sort_by is SortField.ENTRY_SALARY:
        return lambda o: _county_or_statewide(o, county, 'entry')
    if sort_by is SortField.MEDIAN_SALARY:
        return lambda o: _county_or_statewide(o, county, 'median')
    raise ValueError(f"Unsupported sort field: {sort_by!r}")


def sort_occupations(
    occupations: list[Occupation],
    sort_by: Optional[SortField],
    sort_order: SortOrder = SortOrder.ASC,
    county: Optional[str] = None,
) -> list[Occupation]:
    """
    Sort occupations by a field.

    Entries with a missing sort value always go last, in their input order,
    whatever the direction. Only the non-missing part is reversed for 'desc'.
    """
    if sort_by is None:
        return occupations

    key = sort_key_for(sort_by, county)
    keyed = [(key(o), o) for o in occupations]

    present = [item for item in keyed if item[0] is not None]
    missing = [o for value, o in keyed if value is None]

    present.sort(key=lambda item: item[0], reverse=(sort_order is SortOrder.DESC))

    return [o for _, o in present] + missing


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def paginate(occupations: list[Occupation], page: int, page_size: int) -> PaginatedOccupations:
    """
    Slice one 1-indexed page.

    Pages past the end yield an empty page with has_next_page False; page
    numbers are not validated.
    """
    total_count = len(occupations)
    total_pages = math.ceil(total_count / page_size)
    start_index = max((page - 1) * page_size, 0)
    end_index = max(start_index + page_size, 0) if page >= 1 else 0

    return PaginatedOccupations(
        data=occupations[start_index:end_index],
        meta=PageMeta(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        ),
    )


def query_occupations(catalog: Sequence[Occupation], params: OccupationQueryParams) -> PaginatedOccupations:
    """
    Run a catalog query.

    Args:
        catalog: Occupations to query (e.g. repository.specific_occupations())
        params: Query parameters

    Returns:
        PaginatedOccupations with the requested page and metadata
    """
    occupations = list(catalog)

    occupations = filter_by_soc_category(occupations, params.soc_category)
    occupations = filter_by_search(occupations, params.search)
    occupations = filter_by_county(occupations, params.county)
    occupations = filter_by_education(occupations, params.education_level)
    occupations = filter_by_salary(occupations, params.min_salary, params.max_salary)
    occupations = sort_occupations(occupations, params.sort_by, params.sort_order, params.selected_county)

    result = paginate(occupations, params.page, params.page_size)

    logger.debug(
        "Catalog query executed",
        extra={
            'search': params.search,
            'county': params.county,
            'sort_by': params.sort_by.value if params.sort_by else None,
            'total_count': result.meta.total_count,
            'page': params.page,
        }
    )

    return result
