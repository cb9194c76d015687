"""
Pytest configuration and shared fixtures

This file contains test fixtures that can be used across all tests.
Fixtures are reusable components that set up test preconditions.

Learn more: https://docs.pytest.org/en/stable/fixture.html
"""

from typing import Any, Callable, Optional

import pytest

from wage_services.catalog.repository import OccupationRepository
from wage_services.common.models import (
    AnnualWages,
    CountyWageData,
    HourlyWages,
    Occupation,
    WageRange,
    WageRecord,
    occupation_id_for,
)


@pytest.fixture(scope="function")
def sample_wage_row() -> dict:
    """
    Provide one raw spreadsheet row keyed by canonical column names.

    Mirrors what the wage reader returns for a typical county sheet, with
    a suppressed ('*') experienced wage.

    Scope: function (created fresh for each test)

    Returns:
        dict: Raw wage row
    """
    return {
        "soc_code": "15-1252",
        "title": "Software Developers",
        "education_level": "BD",
        "area_type": "CTY",
        "average_hourly_wage": "52.10",
        "average_annual_wage": "108,370",
        "median_annual_wage": 105000,
        "entry_annual_wage": "72000",
        "experienced_annual_wage": "*",
        "mid_range_low": "$88,000",
        "mid_range_high": "#",
    }


@pytest.fixture(scope="function")
def wage_record_factory() -> Callable[..., WageRecord]:
    """
    Provide a factory for WageRecord objects with sensible defaults.

    Returns:
        Callable: make(soc_code, county, **overrides) -> WageRecord
    """
    def make(soc_code: str = "11-1011", county: str = "Adams", **overrides: Any) -> WageRecord:
        fields = {
            "soc_code": soc_code,
            "title": "Chief Executives",
            "education_level": "BD",
            "area_type": "CTY",
            "county": county,
            "data_date": "2024-05",
        }
        fields.update(overrides)
        return WageRecord(**fields)

    return make


@pytest.fixture(scope="function")
def occupation_factory() -> Callable[..., Occupation]:
    """
    Provide a factory for Occupation objects.

    Wages are given as AnnualWages keyword dicts, one for the statewide
    scope and one per county.

    Returns:
        Callable: make(soc_code, title, education_level, statewide, counties) -> Occupation
    """
    def make(
        soc_code: str,
        title: str,
        education_level: str = "BD",
        statewide: Optional[dict] = None,
        counties: Optional[dict[str, dict]] = None,
    ) -> Occupation:
        by_county = tuple(
            CountyWageData(
                county=name,
                area_type="CTY",
                wages=WageRange(hourly=HourlyWages(), annual=AnnualWages(**annual)),
            )
            for name, annual in (counties or {}).items()
        )
        return Occupation(
            id=occupation_id_for(soc_code),
            soc_code=soc_code,
            title=title,
            education_level=education_level,
            statewide=WageRange(hourly=HourlyWages(), annual=AnnualWages(**(statewide or {}))),
            by_county=by_county,
        )

    return make


@pytest.fixture(scope="function")
def sample_catalog(occupation_factory) -> list[Occupation]:
    """
    Provide a small occupation catalog, sorted by SOC code.

    Includes one category header (11-0000) and one occupation with no
    statewide median (35-2014).

    Returns:
        list[Occupation]: Catalog occupations
    """
    return [
        occupation_factory(
            "11-0000", "Management Occupations", "BD",
            statewide={"median": 120000, "entry": 70000, "average": 130000},
            counties={"Adams": {"median": 118000}},
        ),
        occupation_factory(
            "11-1011", "Chief Executives", "BD",
            statewide={"median": 200000, "entry": 110000, "average": 210000,
                       "experienced": 260000, "min": 110000, "max": 260000},
            counties={
                "Adams": {"median": 190000, "entry": 100000, "experienced": 250000,
                          "min": 100000, "max": 250000},
                "York": {"median": 210000, "entry": 120000},
            },
        ),
        occupation_factory(
            "15-1252", "Software Developers", "BD",
            statewide={"median": 110000, "entry": 75000, "average": 115000,
                       "experienced": 140000, "min": 70000, "max": 150000},
            counties={
                "Dauphin": {"median": 99000, "entry": None, "average": 104000,
                            "experienced": 130000, "mid_range_low": 88000,
                            "mid_range_high": 118000, "min": None, "max": 130000},
                "Allegheny": {"median": 121000, "entry": 80000, "average": 125000,
                              "experienced": 150000, "min": 80000, "max": 150000},
            },
        ),
        occupation_factory(
            "29-1141", "Registered Nurses", "AD",
            statewide={"median": 80000, "entry": 62000, "average": 82000,
                       "experienced": 95000, "min": 60000, "max": 98000},
            counties={
                "Dauphin": {"median": 78000, "entry": 60000},
                "Philadelphia": {"median": 86000, "entry": 65000},
            },
        ),
        occupation_factory(
            "35-2014", "Cooks, Restaurant", "ND",
            statewide={},
            counties={"York": {}},
        ),
        occupation_factory(
            "43-9061", "Office Clerks, General", "HS",
            statewide={"median": 40000, "entry": 30000, "average": 42000},
            counties={"York": {"median": 39000, "entry": None}},
        ),
    ]


@pytest.fixture(scope="function")
def repository(sample_catalog) -> OccupationRepository:
    """Provide an OccupationRepository over the sample catalog."""
    return OccupationRepository(sample_catalog)


# Mark tests based on their type for selective running
def pytest_configure(config):
    """
    Register custom pytest markers.

    This allows us to run specific test categories:
    - pytest -m unit        (run only unit tests)
    - pytest -m integration (run only integration tests)
    - pytest -m "not slow"  (skip slow tests)
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (isolated, fast)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (reads/writes files)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (>1 second)"
    )
