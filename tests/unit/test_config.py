"""
Unit tests for configuration loading.
"""

import os
from pathlib import Path

import pytest

from catalog_verifier.catalog import CatalogLoader
from catalog_verifier.config import Settings, load_config
from catalog_verifier.errors import ConfigurationError


class TestSettings:
    """Test the configuration model."""

    def test_defaults(self):
        settings = Settings()

        assert settings.search_paths == [Path(".")]
        assert settings.formats == ["properties", "json", "yaml", "yml"]
        assert settings.parent_fallback is True
        assert settings.root_fallback is False
        assert settings.output_format == "text"

    def test_formats_are_normalized(self):
        assert Settings(formats=[".JSON", "yaml"]).formats == ["json", "yaml"]

    def test_loader_from_settings(self, tmp_path):
        settings = Settings(search_paths=[tmp_path], formats=["json"], root_fallback=True)

        loader = CatalogLoader.from_settings(settings)

        assert loader.search_paths == [tmp_path]
        assert loader.formats == ("json",)
        assert loader.root_fallback is True


class TestLoadConfig:
    """Test merging of file, environment and overrides."""

    def test_no_sources(self):
        assert load_config(environ={}) == Settings()

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "verifier.yaml"
        config_file.write_text(
            "search_paths: [src/resources, build/resources]\n"
            "formats: [properties]\n"
            "root_fallback: true\n",
            encoding="utf-8",
        )

        settings = load_config(config_file, environ={})

        assert settings.search_paths == [Path("src/resources"), Path("build/resources")]
        assert settings.formats == ["properties"]
        assert settings.root_fallback is True

    def test_empty_yaml_file(self, tmp_path):
        config_file = tmp_path / "verifier.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_config(config_file, environ={}) == Settings()

    def test_environment(self):
        environ = {
            "CATALOG_VERIFIER_SEARCH_PATHS": os.pathsep.join(["one", "two"]),
            "CATALOG_VERIFIER_FORMATS": "json, yaml",
            "CATALOG_VERIFIER_PARENT_FALLBACK": "no",
            "CATALOG_VERIFIER_OUTPUT_FORMAT": "json",
        }

        settings = load_config(environ=environ)

        assert settings.search_paths == [Path("one"), Path("two")]
        assert settings.formats == ["json", "yaml"]
        assert settings.parent_fallback is False
        assert settings.output_format == "json"

    def test_priority(self, tmp_path):
        config_file = tmp_path / "verifier.yaml"
        config_file.write_text("output_format: json\ndebug: false\n", encoding="utf-8")

        settings = load_config(
            config_file,
            environ={"CATALOG_VERIFIER_DEBUG": "true"},
            output_format="text",
            search_paths=None,
        )

        assert settings.debug is True
        assert settings.output_format == "text"
        assert settings.search_paths == [Path(".")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.yaml", environ={})

    def test_non_mapping_file(self, tmp_path):
        config_file = tmp_path / "verifier.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_file, environ={})

    def test_invalid_boolean(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(environ={"CATALOG_VERIFIER_ROOT_FALLBACK": "maybe"})

        assert exc_info.value.context["config_key"] == "CATALOG_VERIFIER_ROOT_FALLBACK"

    @pytest.mark.parametrize(
        "overrides",
        [{"formats": ["xml"]}, {"output_format": "html"}, {"search_paths": []}],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(environ={}, **overrides)
