"""
Unit tests for OccupationRepository.
"""

import pytest

from wage_services.catalog.repository import OccupationRepository, is_category_header
from wage_services.publisher.exporter import export_occupations


class TestLookups:
    """Lookup and listing helpers"""

    def test_len_and_iteration(self, repository, sample_catalog):
        assert len(repository) == 6
        assert list(repository) == sample_catalog

    def test_category_split(self, repository):
        assert [o.soc_code for o in repository.category_occupations()] == ["11-0000"]
        assert "11-0000" not in [o.soc_code for o in repository.specific_occupations()]
        assert len(repository.specific_occupations()) == 5
        assert len(repository.all()) == 6

    def test_is_category_header(self, repository):
        assert is_category_header(repository.get_by_code("11-0000")) is True
        assert is_category_header(repository.get_by_code("11-1011")) is False

    def test_get_by_id_and_code(self, repository):
        assert repository.get_by_id("15_1252").title == "Software Developers"
        assert repository.get_by_code("29-1141").id == "29_1141"
        assert repository.get_by_id("99_9999") is None
        assert repository.get_by_code("99-9999") is None

    def test_search_by_title(self, repository):
        assert [o.soc_code for o in repository.search_by_title("clerks")] == ["43-9061"]

    def test_by_education(self, repository):
        assert [o.soc_code for o in repository.by_education("AD")] == ["29-1141"]
        assert len(repository.by_education(["BD", "ND"])) == 4

    def test_by_salary_range(self, repository):
        assert [o.soc_code for o in repository.by_salary_range(100000, 150000)] == ["11-0000", "15-1252"]
        assert [o.soc_code for o in repository.by_salary_range(150000)] == ["11-1011"]

    def test_county_wages_is_case_insensitive(self, repository):
        occupation = repository.get_by_id("15_1252")

        assert repository.county_wages(occupation, "dauphin").county == "Dauphin"
        assert repository.county_wages(occupation, "York") is None


class TestSummaries:
    """Filter options and summaries"""

    def test_available_counties(self, repository):
        assert repository.available_counties() == ["Adams", "Allegheny", "Dauphin", "Philadelphia", "York"]

    def test_education_level_options(self, repository):
        assert repository.education_level_options() == [
            {"value": "AD", "label": "Associate's degree"},
            {"value": "BD", "label": "Bachelor's degree"},
            {"value": "HS", "label": "High school diploma"},
            {"value": "ND", "label": "No formal credential"},
        ]

    def test_salary_range_boundaries(self, repository):
        assert repository.salary_range_boundaries() == {"min": 40000, "max": 200000}

    def test_salary_range_boundaries_empty(self):
        assert OccupationRepository([]).salary_range_boundaries() is None

    def test_top_paying(self, repository):
        assert [o.soc_code for o in repository.top_paying(limit=2)] == ["11-1011", "11-0000"]

    def test_by_major_group(self, repository):
        groups = repository.by_major_group()

        assert list(groups) == ["Management", "Computer & Mathematical", "Healthcare Practitioners & Technical",
                                "Food Preparation & Serving", "Office & Administrative Support"]
        assert len(groups["Management"]) == 2


@pytest.mark.integration
class TestFromJsonFile:
    """Loading the catalog artifact"""

    def test_round_trip(self, tmp_path, sample_catalog):
        path = export_occupations(sample_catalog, tmp_path)

        repository = OccupationRepository.from_json_file(path)

        assert list(repository) == sample_catalog

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            OccupationRepository.from_json_file(tmp_path / "occupations.json")
