"""
Occupation Repository

Read-only access to the aggregated occupation catalog. The repository is
constructed once (usually from occupations.json at startup) and passed to the
query engine callers and the negotiation calculator, so tests can build one
from fixtures instead of touching a global catalog.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from wage_services.common.models import CountyWageData, Occupation
from wage_services.common.vocabulary import (
    format_education_level,
    is_category_header_code,
    soc_major_group,
)
from wage_services.publisher.exporter import load_occupations

logger = logging.getLogger(__name__)


def is_category_header(occupation: Occupation) -> bool:
    """Category headers (SOC codes ending in -0000) are summaries, not job titles."""
    return is_category_header_code(occupation.soc_code)


class OccupationRepository:
    """
    Immutable occupation catalog with lookup helpers.

    Occupations are kept in the order given, which for a built catalog is
    SOC code ascending.
    """

    def __init__(self, occupations: Iterable[Occupation]):
        self._occupations: tuple[Occupation, ...] = tuple(occupations)
        self._by_id = {o.id: o for o in self._occupations}
        self._by_code = {o.soc_code: o for o in self._occupations}

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "OccupationRepository":
        """
        Load the catalog from an occupations.json artifact.

        Raises:
            FileNotFoundError: If the artifact doesn't exist
        """
        repository = cls(load_occupations(path))
        logger.info(
            f"Loaded occupation catalog with {len(repository)} occupations",
            extra={'path': str(path)}
        )
        return repository

    def __len__(self) -> int:
        return len(self._occupations)

    def __iter__(self):
        return iter(self._occupations)

    def all(self) -> list[Occupation]:
        """All occupations, including category headers."""
        return list(self._occupations)

    def specific_occupations(self) -> list[Occupation]:
        """Occupations excluding category headers; use for browsing actual job titles."""
        return [o for o in self._occupations if not is_category_header(o)]

    def category_occupations(self) -> list[Occupation]:
        """Category headers only (major/minor group summary rows)."""
        return [o for o in self._occupations if is_category_header(o)]

    def get_by_id(self, occupation_id: str) -> Optional[Occupation]:
        return self._by_id.get(occupation_id)

    def get_by_code(self, soc_code: str) -> Optional[Occupation]:
        return self._by_code.get(soc_code)

    def search_by_title(self, query: str) -> list[Occupation]:
        """Case-insensitive substring search over titles."""
        query_lower = query.lower()
        return [o for o in self._occupations if query_lower in o.title.lower()]

    def by_education(self, levels: Union[str, Iterable[str]]) -> list[Occupation]:
        """Occupations whose education level is one of `levels`."""
        wanted = {levels} if isinstance(levels, str) else set(levels)
        return [o for o in self._occupations if o.education_level in wanted]

    def by_salary_range(self, min_salary: float, max_salary: Optional[float] = None) -> list[Occupation]:
        """
        Occupations whose statewide median falls within the range.

        Occupations without a statewide median are excluded.
        """
        results = []
        for occupation in self._occupations:
            median = occupation.statewide.annual.median
            if not median:
                continue
            if median < min_salary:
                continue
            if max_salary is not None and median > max_salary:
                continue
            results.append(occupation)
        return results

    @staticmethod
    def county_wages(occupation: Occupation, county: str) -> Optional[CountyWageData]:
        """Wage data of one county for an occupation, matched case-insensitively."""
        county_lower = county.lower()
        return next(
            (c for c in occupation.by_county if c.county.lower() == county_lower),
            None
        )

    def available_counties(self) -> list[str]:
        """Sorted names of every county that reports at least one occupation."""
        return sorted({c.county for o in self._occupations for c in o.by_county})

    def education_level_options(self) -> list[dict[str, str]]:
        """Education levels present in the catalog as filter options."""
        levels = sorted({o.education_level for o in self._occupations})
        return [{'value': level, 'label': format_education_level(level)} for level in levels]

    def salary_range_boundaries(self) -> Optional[dict[str, float]]:
        """Lowest and highest statewide median, or None when no occupation has one."""
        medians = [
            o.statewide.annual.median
            for o in self._occupations
            if o.statewide.annual.median is not None
        ]
        if not medians:
            return None
        return {'min': min(medians), 'max': max(medians)}

    def top_paying(self, limit: int = 10) -> list[Occupation]:
        """Highest statewide medians first; occupations without a median are skipped."""
        with_median = [o for o in self._occupations if o.statewide.annual.median]
        with_median.sort(key=lambda o: o.statewide.annual.median, reverse=True)
        return with_median[:limit]

    def by_major_group(self) -> dict[str, list[Occupation]]:
        """Occupations grouped by SOC major group label, in catalog order."""
        groups: dict[str, list[Occupation]] = {}
        for occupation in self._occupations:
            groups.setdefault(soc_major_group(occupation.soc_code), []).append(occupation)
        return groups
