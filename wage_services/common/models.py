"""
Wage Data Model

Dataclasses for the records that flow through the wage pipeline:

- WageRecord: one canonical row per occupation x county (normalizer output)
- WageRange / HourlyWages / AnnualWages: wage figures for one scope
- CountyWageData: county-level wages attached to an occupation
- Occupation: aggregate root, one per SOC code (aggregator output)

Records are frozen once built. The JSON artifacts use camelCase keys, so every
class converts to and from that wire form with to_dict() / from_dict().
A wage field of None always means "data not available", never zero.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

Wage = Optional[float]


@dataclass(frozen=True)
class WageRecord:
    """Canonical wage row for one occupation in one county."""

    soc_code: str
    title: str
    education_level: str
    area_type: str
    county: str
    average_hourly_wage: Wage = None
    average_annual_wage: Wage = None
    median_annual_wage: Wage = None
    entry_annual_wage: Wage = None
    experienced_annual_wage: Wage = None
    mid_range_low: Wage = None
    mid_range_high: Wage = None
    data_date: str = ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'socCode': self.soc_code,
            'title': self.title,
            'educationLevel': self.education_level,
            'areaType': self.area_type,
            'county': self.county,
            'averageHourlyWage': self.average_hourly_wage,
            'averageAnnualWage': self.average_annual_wage,
            'medianAnnualWage': self.median_annual_wage,
            'entryAnnualWage': self.entry_annual_wage,
            'experiencedAnnualWage': self.experienced_annual_wage,
            'midRangeLow': self.mid_range_low,
            'midRangeHigh': self.mid_range_high,
            'dataDate': self.data_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WageRecord":
        return cls(
            soc_code=data['socCode'],
            title=data.get('title', ''),
            education_level=data.get('educationLevel', '#'),
            area_type=data.get('areaType', 'CTY'),
            county=data.get('county', ''),
            average_hourly_wage=data.get('averageHourlyWage'),
            average_annual_wage=data.get('averageAnnualWage'),
            median_annual_wage=data.get('medianAnnualWage'),
            entry_annual_wage=data.get('entryAnnualWage'),
            experienced_annual_wage=data.get('experiencedAnnualWage'),
            mid_range_low=data.get('midRangeLow'),
            mid_range_high=data.get('midRangeHigh'),
            data_date=data.get('dataDate', ''),
        )


@dataclass(frozen=True)
class HourlyWages:
    """Hourly sub-range. Only `average` is populated at county granularity."""

    average: Wage = None
    min: Wage = None
    max: Wage = None

    def to_dict(self) -> dict[str, Any]:
        return {'average': self.average, 'min': self.min, 'max': self.max}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "HourlyWages":
        data = data or {}
        return cls(average=data.get('average'), min=data.get('min'), max=data.get('max'))


@dataclass(frozen=True)
class AnnualWages:
    """
    Annual sub-range.

    For a county, min/max are the county's entry/experienced wages. For the
    statewide aggregate they are the extremes of the pooled average, median,
    entry and experienced values.
    """

    average: Wage = None
    median: Wage = None
    entry: Wage = None
    experienced: Wage = None
    mid_range_low: Wage = None
    mid_range_high: Wage = None
    min: Wage = None
    max: Wage = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'average': self.average,
            'median': self.median,
            'entry': self.entry,
            'experienced': self.experienced,
            'midRangeLow': self.mid_range_low,
            'midRangeHigh': self.mid_range_high,
            'min': self.min,
            'max': self.max,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "AnnualWages":
        data = data or {}
        return cls(
            average=data.get('average'),
            median=data.get('median'),
            entry=data.get('entry'),
            experienced=data.get('experienced'),
            mid_range_low=data.get('midRangeLow'),
            mid_range_high=data.get('midRangeHigh'),
            min=data.get('min'),
            max=data.get('max'),
        )


@dataclass(frozen=True)
class WageRange:
    """Hourly and annual wages for one scope (a county or statewide)."""

    hourly: HourlyWages = field(default_factory=HourlyWages)
    annual: AnnualWages = field(default_factory=AnnualWages)

    def to_dict(self) -> dict[str, Any]:
        return {'hourly': self.hourly.to_dict(), 'annual': self.annual.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WageRange":
        return cls(
            hourly=HourlyWages.from_dict(data.get('hourly')),
            annual=AnnualWages.from_dict(data.get('annual')),
        )


@dataclass(frozen=True)
class CountyWageData:
    """Wages reported by one county for an occupation."""

    county: str
    area_type: str
    wages: WageRange

    def to_dict(self) -> dict[str, Any]:
        return {'county': self.county, 'areaType': self.area_type, 'wages': self.wages.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CountyWageData":
        return cls(
            county=data['county'],
            area_type=data.get('areaType', 'CTY'),
            wages=WageRange.from_dict(data.get('wages', {})),
        )


@dataclass(frozen=True)
class Occupation:
    """
    Aggregated occupation, one per SOC code.

    `by_county` holds at most one entry per county. A county that is absent
    has no data for this occupation; it does not mean zero wages.
    """

    id: str
    soc_code: str
    title: str
    education_level: str
    statewide: WageRange
    by_county: tuple[CountyWageData, ...] = ()
    education_description: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'id': self.id,
            'socCode': self.soc_code,
            'title': self.title,
            'educationLevel': self.education_level,
            'wages': {
                'statewide': self.statewide.to_dict(),
                'byCounty': [county.to_dict() for county in self.by_county],
            },
        }
        if self.education_description is not None:
            data['educationDescription'] = self.education_description
        if self.metadata is not None:
            data['metadata'] = self.metadata
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Occupation":
        wages = data.get('wages', {})
        return cls(
            id=data['id'],
            soc_code=data['socCode'],
            title=data.get('title', ''),
            education_level=data.get('educationLevel', '#'),
            statewide=WageRange.from_dict(wages.get('statewide', {})),
            by_county=tuple(CountyWageData.from_dict(c) for c in wages.get('byCounty', [])),
            education_description=data.get('educationDescription'),
            metadata=data.get('metadata'),
        )


def occupation_id_for(soc_code: str) -> str:
    """Derive the occupation id from its SOC code ('15-1252' -> '15_1252')."""
    return soc_code.replace('-', '_')
