"""
Unit tests for the catalog configuration loader.
"""

from pathlib import Path

import pytest

from wage_services.common.config_loader import (
    BuildSettings,
    CatalogConfig,
    default_config_path,
    load_catalog_config,
)


class TestCatalogConfig:
    """Tests for CatalogConfig.from_dict()"""

    def test_defaults(self):
        config = CatalogConfig.from_dict({})

        assert config.build.data_dir == "data/raw"
        assert config.build.header_row == 5
        assert config.build.label_strategy == "first"
        assert config.query.default_page_size == 25
        assert config.negotiation.state_name == "Pennsylvania"
        assert config.negotiation.state_abbreviation == "PA"

    def test_artifact_paths(self):
        build = BuildSettings(output_dir="/tmp/catalog")

        assert build.wage_records_path == Path("/tmp/catalog/wage-records.json")
        assert build.occupations_path == Path("/tmp/catalog/occupations.json")

    @pytest.mark.parametrize("config_dict", [
        {"build": {"label_strategy": "loudest"}},
        {"build": {"header_row": -1}},
        {"query": {"default_page_size": 0}},
    ])
    def test_invalid_values_raise(self, config_dict):
        with pytest.raises(ValueError):
            CatalogConfig.from_dict(config_dict)

    def test_env_overrides(self):
        config = CatalogConfig.from_dict({}).apply_env_overrides({
            "WAGE_DATA_DIR": "/data/2025",
            "WAGE_OUTPUT_DIR": "/srv/catalog",
            "WAGE_DATA_DATE": "2025-05",
        })

        assert config.build.data_dir == "/data/2025"
        assert config.build.output_dir == "/srv/catalog"
        assert config.build.data_date == "2025-05"

    def test_empty_env_values_are_ignored(self):
        config = CatalogConfig.from_dict({}).apply_env_overrides({"WAGE_DATA_DIR": ""})
        assert config.build.data_dir == "data/raw"


class TestLoadCatalogConfig:
    """Tests for load_catalog_config()"""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "wage_catalog.yml"
        path.write_text(
            "build:\n"
            "  data_dir: /data/raw\n"
            "  data_date: '2023-05'\n"
            "  label_strategy: most_common\n"
            "query:\n"
            "  default_page_size: 50\n"
        )

        config = load_catalog_config(str(path))

        assert config.build.data_dir == "/data/raw"
        assert config.build.data_date == "2023-05"
        assert config.build.label_strategy == "most_common"
        assert config.query.default_page_size == 50

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert load_catalog_config(str(path)).build.header_row == 5

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog_config(str(tmp_path / "missing.yml"))

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("build: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_catalog_config(str(path))

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "from_env.yml"
        path.write_text("query:\n  default_page_size: 10\n")
        monkeypatch.setenv("WAGE_CONFIG_PATH", str(path))

        assert load_catalog_config().query.default_page_size == 10

    def test_shipped_config_is_valid(self):
        config = load_catalog_config(str(default_config_path()))
        assert config.build.header_row == 5
