"""
Salary Negotiation Calculator

Given an occupation, a location scope (a county or 'statewide') and an
experience tier, derives a target salary, a three-point comparison range,
a rough percentile and short insight strings for the salary negotiation page.

This module contains the pure calculation; the occupation lookup goes through
an OccupationRepository passed in by the caller.

Note on `percentile`: it is target / range.high as a percentage, a ratio
against the tier's own upper bound. It is not a population percentile.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from wage_services.catalog.repository import OccupationRepository
from wage_services.common.models import Occupation, WageRange

logger = logging.getLogger(__name__)

STATEWIDE = 'statewide'


class ExperienceLevel(str, Enum):
    ENTRY = 'entry'
    MID = 'mid'
    EXPERIENCED = 'experienced'


@dataclass(frozen=True)
class SalaryRange:
    low: float = 0
    mid: float = 0
    high: float = 0

    def to_dict(self) -> dict[str, float]:
        return {'low': self.low, 'mid': self.mid, 'high': self.high}


@dataclass(frozen=True)
class SalaryNegotiationData:
    """Negotiation report for one occupation, scope and tier. Recomputed per call."""

    occupation_id: str
    title: str
    location: str
    experience_level: ExperienceLevel
    target_salary: float
    salary_range: SalaryRange
    county_median: float
    statewide_median: float
    percentile: Optional[int] = None
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'occupationId': self.occupation_id,
            'title': self.title,
            'location': self.location,
            'experienceLevel': self.experience_level.value,
            'targetSalary': self.target_salary,
            'salaryRange': self.salary_range.to_dict(),
            'countyMedian': self.county_median,
            'statewideMedian': self.statewide_median,
            'insights': list(self.insights),
        }
        if self.percentile is not None:
            data['percentile'] = self.percentile
        return data


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _first_truthy(*values: Optional[float]) -> float:
    """First non-zero, non-None value, else 0."""
    for value in values:
        if value:
            return value
    return 0


def select_target_and_range(
    wages: WageRange,
    experience_level: ExperienceLevel,
) -> tuple[Optional[float], SalaryRange]:
    """
    Pick the target salary and comparison range for an experience tier.

    - entry: target = entry; range = entry|min, median, average
    - mid: target = median; range = midRangeLow|entry, median, midRangeHigh|average
    - experienced: target = experienced; range = average, experienced, max

    Missing values in the range fall through to the next candidate and
    finally to 0.
    """
    annual = wages.annual

    if experience_level is ExperienceLevel.ENTRY:
        return annual.entry, SalaryRange(
            low=_first_truthy(annual.entry, annual.min),
            mid=_first_truthy(annual.median),
            high=_first_truthy(annual.average),
        )

    if experience_level is ExperienceLevel.MID:
        return annual.median, SalaryRange(
            low=_first_truthy(annual.mid_range_low, annual.entry),
            mid=_first_truthy(annual.median),
            high=_first_truthy(annual.mid_range_high, annual.average),
        )

    return annual.experienced, SalaryRange(
        low=_first_truthy(annual.average),
        mid=_first_truthy(annual.experienced),
        high=_first_truthy(annual.max),
    )


def build_insights(
    county: str,
    experience_level: ExperienceLevel,
    wages: WageRange,
    target_salary: float,
    county_median: float,
    statewide_median: float,
) -> list[str]:
    """
    Generate the insight strings, in display order.

    1. County vs statewide median, for a specific county whose median differs
    2. Experience note, for the experienced tier when that wage is reported
    3. Growth potential from the target up to the scope's max wage
    """
    insights: list[str] = []
    is_statewide = county == STATEWIDE

    if not is_statewide and county_median and statewide_median and county_median != statewide_median:
        diff = _round_half_up(abs(county_median - statewide_median) / statewide_median * 100)
        direction = 'above' if county_median > statewide_median else 'below'
        insights.append(f"{county} County pays {diff}% {direction} state average for this role")

    if experience_level is ExperienceLevel.EXPERIENCED and wages.annual.experienced:
        insights.append('With experience, you can earn significantly more than entry-level')

    if wages.annual.max and target_salary:
        growth = _round_half_up((wages.annual.max - target_salary) / target_salary * 100)
        insights.append(f"{growth}% growth potential in this career")

    return insights


def calculate_negotiation(
    occupation: Occupation,
    county: str,
    experience_level: ExperienceLevel,
    wages: WageRange,
    state_name: str = 'Pennsylvania',
    state_abbreviation: str = 'PA',
) -> Optional[SalaryNegotiationData]:
    """
    Compute the negotiation report for already-resolved wages.

    Returns:
        SalaryNegotiationData, or None when the tier's target salary is
        missing or zero
    """
    target_salary, salary_range = select_target_and_range(wages, experience_level)

    if not target_salary:
        logger.debug(
            "No target salary for tier",
            extra={'occupation_id': occupation.id, 'county': county, 'experience_level': experience_level.value}
        )
        return None

    statewide_median = occupation.statewide.annual.median or 0
    county_median = wages.annual.median or 0
    is_statewide = county == STATEWIDE

    percentile = None
    if salary_range.high:
        percentile = _round_half_up(target_salary / salary_range.high * 100)

    return SalaryNegotiationData(
        occupation_id=occupation.id,
        title=occupation.title,
        location=f"{state_name} (Statewide)" if is_statewide else f"{county} County, {state_abbreviation}",
        experience_level=experience_level,
        target_salary=target_salary,
        salary_range=salary_range,
        county_median=county_median,
        statewide_median=statewide_median,
        percentile=percentile,
        insights=build_insights(
            county, experience_level, wages, target_salary, county_median, statewide_median
        ),
    )


def get_salary_negotiation_data(
    repository: OccupationRepository,
    occupation_id: str,
    county: str,
    experience_level: str,
    state_name: str = 'Pennsylvania',
    state_abbreviation: str = 'PA',
) -> Optional[SalaryNegotiationData]:
    """
    Salary negotiation data for an occupation, scope and experience tier.

    "No data for this combination" is an expected outcome and returns None,
    not an error.

    Args:
        repository: Occupation catalog
        occupation_id: Occupation id, e.g. '15_1252'
        county: County name (matched case-insensitively, reported with the
                catalog's spelling) or 'statewide'
        experience_level: 'entry', 'mid' or 'experienced'

    Returns:
        SalaryNegotiationData or None

    Raises:
        ValueError: If experience_level is not a known tier

    Example:
        >>> data = get_salary_negotiation_data(repo, '15_1252', 'Dauphin', 'entry')
        >>> data.location
        'Dauphin County, PA'
    """
    level = ExperienceLevel(experience_level)

    occupation = repository.get_by_id(occupation_id)
    if occupation is None:
        return None

    if county == STATEWIDE:
        wages = occupation.statewide
    else:
        county_data = repository.county_wages(occupation, county)
        if county_data is None:
            return None
        county = county_data.county
        wages = county_data.wages

    return calculate_negotiation(
        occupation,
        county,
        level,
        wages,
        state_name=state_name,
        state_abbreviation=state_abbreviation,
    )
