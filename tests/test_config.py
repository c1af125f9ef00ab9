"""Tests for application configuration."""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from infofind.config import AppConfig, FieldSpec, config_from_dict, load_config
from infofind.errors import ConfigError


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig(data_dir=Path("/site"))

        assert config.field_prefix == "infofind_field_"
        assert config.field_size == 50
        assert config.url == ""
        assert config.sort_param is None
        assert config.sort_order == ()
        assert dict(config.type_spec) == {}

    def test_config_is_immutable(self) -> None:
        """Components cannot change the shared configuration."""
        config = AppConfig(data_dir=Path("/site"), type_spec={"Author": FieldSpec()})

        with pytest.raises(FrozenInstanceError):
            config.field_prefix = "other_"  # type: ignore[misc]
        with pytest.raises(TypeError):
            config.type_spec["Title"] = FieldSpec(type="title")  # type: ignore[index]

    def test_fields_sorted(self) -> None:
        """Declared fields come back in lexicographic order."""
        config = AppConfig(type_spec={"Year": FieldSpec(), "Author": FieldSpec(), "Title": FieldSpec()})

        assert config.fields == ["Author", "Title", "Year"]

    def test_field_spec_declared(self) -> None:
        config = AppConfig(type_spec={"Title": FieldSpec(type="title")})

        assert config.field_spec("Title").type == "title"

    def test_field_spec_unknown_defaults_to_string(self) -> None:
        """Undeclared fields behave like plain strings."""
        config = AppConfig(type_spec={"Title": FieldSpec(type="title")})

        spec = config.field_spec("Publisher")

        assert spec.type == "string"
        assert spec.values == ()

    def test_resolve_data_dir_absolute(self) -> None:
        config = AppConfig(data_dir=Path("/absolute/site"))

        assert config.resolve_data_dir(Path("/base")) == Path("/absolute/site")

    def test_resolve_data_dir_relative_with_base(self) -> None:
        config = AppConfig(data_dir=Path("site"))

        assert config.resolve_data_dir(Path("/base")) == Path("/base/site")

    def test_resolve_data_dir_relative_no_base(self) -> None:
        config = AppConfig(data_dir=Path("site"))

        assert config.resolve_data_dir() == Path("site")


class TestFieldSpec:
    """Test FieldSpec parsing."""

    def test_from_dict_limited(self) -> None:
        spec = FieldSpec.from_dict("Genre", {"type": "limited", "values": ["Mystery", "Romance"]})

        assert spec == FieldSpec(type="limited", values=("Mystery", "Romance"))

    def test_from_dict_defaults_to_string(self) -> None:
        assert FieldSpec.from_dict("Author", {}).type == "string"

    def test_from_dict_rejects_unknown_type(self) -> None:
        with pytest.raises(ConfigError, match="Unknown type"):
            FieldSpec.from_dict("Author", {"type": "date"})

    def test_from_dict_rejects_non_mapping(self) -> None:
        with pytest.raises(ConfigError):
            FieldSpec.from_dict("Author", "string")


class TestLoadConfig:
    """Test reading Posy-style JSON configuration."""

    def test_config_from_dict(self) -> None:
        config = config_from_dict(
            {
                "info_type_spec": {"Author": {"type": "string"}, "Title": {"type": "title"}},
                "info_sort_param": "sort",
                "info_sort_param_reverse": "reverse",
                "info_sort_spec": {"order": ["Author", "Title"]},
                "infofind_field_size": "30",
                "infofind_url": "http://example.com/cgi-bin/posy.cgi",
                "url": "http://example.com",
                "data_dir": "/srv/site",
            }
        )

        assert config.fields == ["Author", "Title"]
        assert config.sort_param == "sort"
        assert config.sort_param_reverse == "reverse"
        assert config.sort_order == ("Author", "Title")
        assert config.field_size == 30
        assert config.url == "http://example.com/cgi-bin/posy.cgi"
        assert config.site_url == "http://example.com"
        assert config.data_dir == Path("/srv/site")

    def test_empty_prefix_falls_back_to_default(self) -> None:
        config = config_from_dict({"infofind_field_prefix": ""}, data_dir=Path("/site"))

        assert config.field_prefix == "infofind_field_"

    def test_overrides_win(self) -> None:
        config = config_from_dict({"data_dir": "/srv/site"}, data_dir=Path("/other"))

        assert config.data_dir == Path("/other")

    def test_none_override_ignored(self) -> None:
        config = config_from_dict({"data_dir": "/srv/site"}, data_dir=None)

        assert config.data_dir == Path("/srv/site")

    def test_load_config_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"info_type_spec": {"Author": {}}}), encoding="utf-8")

        config = load_config(path, data_dir=tmp_path)

        assert config.fields == ["Author"]
        assert config.data_dir == tmp_path

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_load_config_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unable to read"):
            load_config(tmp_path / "missing.json")

    def test_bad_sort_order(self) -> None:
        with pytest.raises(ConfigError):
            config_from_dict({"info_sort_spec": {"order": "Author"}})

    def test_bad_field_size(self) -> None:
        with pytest.raises(ConfigError):
            config_from_dict({"infofind_field_size": "wide"})
