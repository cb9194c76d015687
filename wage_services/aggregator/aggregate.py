"""
Occupation Aggregation Logic

This module groups the cross-county WageRecord stream by SOC code and builds
one Occupation per code, with a statewide WageRange and one CountyWageData
per reporting county.

Statewide figures are averages over every member record of a code: a record
with no value for one wage type is left out of that type's mean rather than
counted as zero. The statewide annual min/max are taken over the pooled
average, median, entry and experienced values of every record. Only by_county
is reduced to one entry per county. Statewide mid-range bounds are left empty;
no cross-county percentile interpolation is attempted.
"""

import logging
from collections import Counter
from typing import Iterable, Optional

from wage_services.common.models import (
    AnnualWages,
    CountyWageData,
    HourlyWages,
    Occupation,
    WageRange,
    WageRecord,
    occupation_id_for,
)
from wage_services.common.vocabulary import STATEWIDE_AREA_TYPE, format_education_level

logger = logging.getLogger(__name__)

LABEL_STRATEGIES = ('first', 'most_common', 'statewide')


def group_by_soc_code(records: Iterable[WageRecord]) -> dict[str, list[WageRecord]]:
    """
    Partition records by SOC code.

    Groups keep the order in which codes and records were first seen, but
    callers must not rely on group order; aggregate_occupations() sorts its
    output explicitly.
    """
    groups: dict[str, list[WageRecord]] = {}
    for record in records:
        groups.setdefault(record.soc_code, []).append(record)
    return groups


def _present(values: Iterable[Optional[float]]) -> list[float]:
    return [value for value in values if value is not None]


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def build_statewide_wages(records: list[WageRecord]) -> WageRange:
    """
    Compute the statewide WageRange for one occupation.

    Args:
        records: All county records for a single SOC code

    Returns:
        WageRange with averaged annual/hourly figures and pooled min/max
    """
    averages = _present(r.average_annual_wage for r in records)
    medians = _present(r.median_annual_wage for r in records)
    entries = _present(r.entry_annual_wage for r in records)
    experienced = _present(r.experienced_annual_wage for r in records)
    hourly = _present(r.average_hourly_wage for r in records)

    pooled = averages + medians + entries + experienced

    return WageRange(
        hourly=HourlyWages(
            average=_mean(hourly),
            min=min(hourly) if hourly else None,
            max=max(hourly) if hourly else None,
        ),
        annual=AnnualWages(
            average=_mean(averages),
            median=_mean(medians),
            entry=_mean(entries),
            experienced=_mean(experienced),
            mid_range_low=None,
            mid_range_high=None,
            min=min(pooled) if pooled else None,
            max=max(pooled) if pooled else None,
        ),
    )


def build_county_wages(record: WageRecord) -> CountyWageData:
    """
    Shape one county record as CountyWageData.

    Annual min/max are the county's entry/experienced wages as reported;
    hourly min/max are not available at county granularity.
    """
    return CountyWageData(
        county=record.county,
        area_type=record.area_type,
        wages=WageRange(
            hourly=HourlyWages(average=record.average_hourly_wage),
            annual=AnnualWages(
                average=record.average_annual_wage,
                median=record.median_annual_wage,
                entry=record.entry_annual_wage,
                experienced=record.experienced_annual_wage,
                mid_range_low=record.mid_range_low,
                mid_range_high=record.mid_range_high,
                min=record.entry_annual_wage,
                max=record.experienced_annual_wage,
            ),
        ),
    )


def select_labels(records: list[WageRecord], strategy: str = 'first') -> tuple[str, str]:
    """
    Pick the title and education level for an occupation.

    Strategies:
    - first: values of the first record in group order
    - most_common: most frequent value, ties go to the first seen
    - statewide: values of the STW record when there is one, else first

    Args:
        records: Non-empty list of records for one SOC code
        strategy: One of LABEL_STRATEGIES

    Returns:
        Tuple of (title, education_level)

    Raises:
        ValueError: If strategy is unknown
    """
    if strategy not in LABEL_STRATEGIES:
        raise ValueError(f"Unknown label strategy {strategy!r}, expected one of {LABEL_STRATEGIES}")

    if strategy == 'most_common':
        title = Counter(r.title for r in records).most_common(1)[0][0]
        education = Counter(r.education_level for r in records).most_common(1)[0][0]
        return title, education

    chosen = records[0]
    if strategy == 'statewide':
        chosen = next((r for r in records if r.area_type == STATEWIDE_AREA_TYPE), records[0])

    return chosen.title, chosen.education_level


def _unique_counties(soc_code: str, records: list[WageRecord]) -> list[WageRecord]:
    """
    Keep the first record per county so by_county has one entry per county.

    Only by_county is deduplicated; statewide figures pool every record.
    """
    seen: set[str] = set()
    unique = []
    for record in records:
        if record.county in seen:
            logger.warning(
                "Duplicate county record for occupation, keeping the first",
                extra={'soc_code': soc_code, 'county': record.county}
            )
            continue
        seen.add(record.county)
        unique.append(record)
    return unique


def aggregate_occupation(
    soc_code: str,
    records: list[WageRecord],
    label_strategy: str = 'first',
) -> Occupation:
    """
    Build the Occupation for one SOC code.

    Args:
        soc_code: SOC code shared by all records
        records: Non-empty list of county records for that code
        label_strategy: How to choose title and education level

    Returns:
        Occupation with statewide wages pooled over all records and one
        per-county entry per county
    """
    county_records = _unique_counties(soc_code, records)

    titles = {r.title for r in records}
    if len(titles) > 1:
        logger.warning(
            "Counties disagree on occupation title",
            extra={'soc_code': soc_code, 'titles': sorted(titles), 'label_strategy': label_strategy}
        )

    title, education_level = select_labels(records, label_strategy)

    return Occupation(
        id=occupation_id_for(soc_code),
        soc_code=soc_code,
        title=title,
        education_level=education_level,
        education_description=format_education_level(education_level),
        statewide=build_statewide_wages(records),
        by_county=tuple(build_county_wages(r) for r in county_records),
    )


def aggregate_occupations(
    records: Iterable[WageRecord],
    label_strategy: str = 'first',
) -> list[Occupation]:
    """
    Aggregate county wage records into the occupation catalog.

    Args:
        records: Flat WageRecord stream from all counties
        label_strategy: How to choose title and education level

    Returns:
        Occupations sorted by SOC code ascending. This sort is the only
        ordering guarantee of the catalog.
    """
    groups = group_by_soc_code(records)

    occupations = [
        aggregate_occupation(soc_code, group, label_strategy)
        for soc_code, group in groups.items()
    ]
    occupations.sort(key=lambda occupation: occupation.soc_code)

    logger.info(
        f"Aggregated {len(occupations)} occupations",
        extra={'occupations': len(occupations), 'label_strategy': label_strategy}
    )

    return occupations


def education_level_distribution(occupations: Iterable[Occupation]) -> list[tuple[str, int]]:
    """Count occupations per education level, most common first."""
    return Counter(o.education_level for o in occupations).most_common()
