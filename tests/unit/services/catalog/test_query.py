"""
Unit tests for the catalog query engine.

Test Organization:
- TestQueryParams: parameter construction and the camelCase contract
- TestFilters: each filter stage on its own
- TestSorting: sort fields, null placement and direction
- TestPagination: page slicing and metadata
"""

import pytest

from wage_services.catalog.query import (
    OccupationQueryParams,
    PaginatedOccupations,
    SortField,
    SortOrder,
    filter_by_county,
    filter_by_education,
    filter_by_salary,
    filter_by_search,
    filter_by_soc_category,
    paginate,
    query_occupations,
    sort_occupations,
)


def codes(occupations):
    return [o.soc_code for o in occupations]


# ============================================================================
# Parameter Tests
# ============================================================================

class TestQueryParams:
    """Tests for OccupationQueryParams"""

    def test_defaults(self):
        params = OccupationQueryParams()

        assert params.page == 1
        assert params.page_size == 25
        assert params.sort_by is None
        assert params.sort_order is SortOrder.ASC
        assert params.selected_county is None

    def test_strings_are_coerced_to_enums(self):
        params = OccupationQueryParams(sort_by="wages", sort_order="desc")

        assert params.sort_by is SortField.MEDIAN_WAGE
        assert params.sort_order is SortOrder.DESC

    @pytest.mark.parametrize("kwargs", [
        {"sort_by": "salary"},
        {"sort_order": "sideways"},
        {"page_size": 0},
        {"page_size": -5},
        {"page_size": True},
        {"page_size": False},
    ])
    def test_invalid_params_raise(self, kwargs):
        with pytest.raises(ValueError):
            OccupationQueryParams(**kwargs)

    def test_from_dict(self):
        params = OccupationQueryParams.from_dict({
            "page": 2,
            "pageSize": 10,
            "sortBy": "title",
            "sortOrder": "desc",
            "search": "nurse",
            "educationLevel": ["AD", "BD"],
            "minSalary": 50000,
            "county": "Dauphin",
            "socCategory": "29",
        })

        assert params.page == 2
        assert params.page_size == 10
        assert params.sort_by is SortField.TITLE
        assert params.sort_order is SortOrder.DESC
        assert params.education_level == ("AD", "BD")
        assert params.min_salary == 50000
        assert params.max_salary is None
        assert params.selected_county == "Dauphin"
        assert params.soc_category == "29"

    def test_from_dict_default_page_size(self):
        assert OccupationQueryParams.from_dict({}, default_page_size=50).page_size == 50

    def test_all_counties_means_no_county(self):
        assert OccupationQueryParams(county="All").selected_county is None


# ============================================================================
# Filter Tests
# ============================================================================

class TestFilters:
    """Tests for the individual filter stages"""

    def test_search_matches_title_case_insensitively(self, sample_catalog):
        assert codes(filter_by_search(sample_catalog, "NURSE")) == ["29-1141"]

    def test_search_matches_soc_code(self, sample_catalog):
        assert codes(filter_by_search(sample_catalog, "15-12")) == ["15-1252"]

    def test_empty_search_is_noop(self, sample_catalog):
        assert filter_by_search(sample_catalog, "") == sample_catalog
        assert filter_by_search(sample_catalog, None) == sample_catalog

    def test_county_filter_is_exact(self, sample_catalog):
        assert codes(filter_by_county(sample_catalog, "Dauphin")) == ["15-1252", "29-1141"]
        assert filter_by_county(sample_catalog, "dauphin") == []

    def test_county_all_disables_filter(self, sample_catalog):
        assert filter_by_county(sample_catalog, "All") == sample_catalog

    def test_education_filter(self, sample_catalog):
        assert codes(filter_by_education(sample_catalog, ["AD", "HS"])) == ["29-1141", "43-9061"]
        assert filter_by_education(sample_catalog, []) == sample_catalog

    def test_salary_filter_bounds(self, sample_catalog):
        result = filter_by_salary(sample_catalog, 50000, 150000)
        assert codes(result) == ["11-0000", "15-1252", "29-1141"]

    def test_salary_filter_excludes_null_median(self, sample_catalog):
        assert "35-2014" not in codes(filter_by_salary(sample_catalog, 0, None))
        assert "35-2014" not in codes(filter_by_salary(sample_catalog, None, 10 ** 9))

    def test_salary_filter_without_bounds_keeps_everything(self, sample_catalog):
        assert filter_by_salary(sample_catalog, None, None) == sample_catalog

    def test_soc_category(self, sample_catalog):
        assert codes(filter_by_soc_category(sample_catalog, "11")) == ["11-0000", "11-1011"]


# ============================================================================
# Sorting Tests
# ============================================================================

class TestSorting:
    """Tests for sort_occupations()"""

    def test_no_sort_keeps_catalog_order(self, sample_catalog):
        assert sort_occupations(sample_catalog, None) == sample_catalog

    def test_title_sort_is_case_insensitive(self, occupation_factory):
        catalog = [
            occupation_factory("11-1011", "zoologists"),
            occupation_factory("11-1021", "Actuaries"),
            occupation_factory("11-1031", "bakers"),
        ]

        result = sort_occupations(catalog, SortField.TITLE)

        assert [o.title for o in result] == ["Actuaries", "bakers", "zoologists"]

    def test_wages_treats_missing_median_as_zero(self, sample_catalog):
        asc = sort_occupations(sample_catalog, SortField.MEDIAN_WAGE, SortOrder.ASC)
        desc = sort_occupations(sample_catalog, SortField.MEDIAN_WAGE, SortOrder.DESC)

        assert codes(asc)[0] == "35-2014"
        assert codes(desc)[-1] == "35-2014"
        assert codes(desc)[0] == "11-1011"

    def test_nulls_last_in_both_directions(self, occupation_factory):
        catalog = [
            occupation_factory("11-1011", "A", statewide={"entry": 50000}),
            occupation_factory("11-1021", "B", statewide={}),
            occupation_factory("11-1031", "C", statewide={"entry": 70000}),
            occupation_factory("11-1041", "D", statewide={"entry": 60000}),
            occupation_factory("11-1051", "E", statewide={}),
        ]

        asc = codes(sort_occupations(catalog, SortField.ENTRY_SALARY, SortOrder.ASC))
        desc = codes(sort_occupations(catalog, SortField.ENTRY_SALARY, SortOrder.DESC))

        assert asc == ["11-1011", "11-1041", "11-1031", "11-1021", "11-1051"]
        assert desc == ["11-1031", "11-1041", "11-1011", "11-1021", "11-1051"]
        assert asc[:3] == list(reversed(desc[:3]))

    def test_county_aware_salary_sort(self, sample_catalog):
        dauphin = filter_by_county(sample_catalog, "Dauphin")

        result = sort_occupations(dauphin, SortField.MEDIAN_SALARY, SortOrder.ASC, county="Dauphin")

        # Dauphin medians: nurses 78000, developers 99000
        assert codes(result) == ["29-1141", "15-1252"]

    def test_county_salary_falls_back_to_statewide(self, sample_catalog):
        # Dauphin has no entry wage for developers, so the statewide 75000 is used
        result = sort_occupations(
            filter_by_county(sample_catalog, "Dauphin"), SortField.ENTRY_SALARY, SortOrder.ASC, county="Dauphin"
        )

        assert codes(result) == ["29-1141", "15-1252"]

    def test_education_level_sort(self, sample_catalog):
        result = sort_occupations(sample_catalog, SortField.EDUCATION_LEVEL)
        assert [o.education_level for o in result] == ["AD", "BD", "BD", "BD", "HS", "ND"]


# ============================================================================
# Pagination Tests
# ============================================================================

class TestPagination:
    """Tests for paginate() and query_occupations()"""

    def test_meta(self, sample_catalog):
        result = paginate(sample_catalog, page=2, page_size=4)

        assert codes(result.data) == ["35-2014", "43-9061"]
        assert result.meta.total_count == 6
        assert result.meta.total_pages == 2
        assert result.meta.has_next_page is False
        assert result.meta.has_previous_page is True

    @pytest.mark.parametrize("page_size", [1, 2, 4, 5, 6, 25])
    def test_round_trip_covers_everything_once(self, sample_catalog, page_size):
        params = OccupationQueryParams(page_size=page_size, sort_by="wages", sort_order="desc")
        first = query_occupations(sample_catalog, params)

        collected = []
        for page in range(1, first.meta.total_pages + 1):
            result = query_occupations(
                sample_catalog,
                OccupationQueryParams(page=page, page_size=page_size, sort_by="wages", sort_order="desc"),
            )
            collected.extend(result.data)

        assert len(collected) == len(sample_catalog)
        assert len({o.soc_code for o in collected}) == len(sample_catalog)

    def test_page_past_the_end_is_empty(self, sample_catalog):
        result = paginate(sample_catalog, page=10, page_size=25)

        assert result.data == []
        assert result.meta.has_next_page is False
        assert result.meta.total_pages == 1

    def test_page_zero_is_empty(self, sample_catalog):
        assert paginate(sample_catalog, page=0, page_size=25).data == []

    def test_empty_result(self):
        result = paginate([], page=1, page_size=25)

        assert result.meta.total_pages == 0
        assert result.meta.has_next_page is False
        assert result.meta.has_previous_page is False

    def test_query_combines_stages(self, sample_catalog):
        params = OccupationQueryParams.from_dict({
            "county": "York",
            "minSalary": 30000,
            "sortBy": "socCode",
            "sortOrder": "desc",
            "pageSize": 1,
        })

        result = query_occupations(sample_catalog, params)

        assert isinstance(result, PaginatedOccupations)
        assert codes(result.data) == ["43-9061"]
        assert result.meta.total_count == 2
        assert result.meta.has_next_page is True

    def test_response_contract(self, sample_catalog):
        payload = query_occupations(sample_catalog, OccupationQueryParams(page_size=2)).to_dict()

        assert set(payload) == {"data", "meta"}
        assert payload["meta"] == {
            "page": 1,
            "pageSize": 2,
            "totalCount": 6,
            "totalPages": 3,
            "hasNextPage": True,
            "hasPreviousPage": False,
        }
        assert payload["data"][0]["socCode"] == "11-0000"
