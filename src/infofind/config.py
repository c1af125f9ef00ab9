"""Application configuration defaults."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from infofind.errors import ConfigError, UnknownFieldError

LOGGER = logging.getLogger(__name__)

FIELD_TYPES = ("string", "title", "number", "text", "limited")
DEFAULT_FIELD_PREFIX = "infofind_field_"


def _get_default_data_dir() -> Path:
    """Use a local data/ directory when there is one, else the cwd."""
    local_data = Path("data")
    if local_data.is_dir():
        return local_data
    return Path(".")


@dataclass(slots=True, frozen=True)
class FieldSpec:
    """Declared type of a searchable field."""

    type: str = "string"
    values: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, name: str, raw: Any) -> "FieldSpec":
        if not isinstance(raw, Mapping):
            raise ConfigError(f"info_type_spec entry for {name!r} must be an object")
        field_type = raw.get("type", "string")
        if field_type not in FIELD_TYPES:
            raise ConfigError(f"Unknown type {field_type!r} for field {name!r}")
        values = raw.get("values") or ()
        if not isinstance(values, (list, tuple)):
            raise ConfigError(f"'values' for field {name!r} must be a list")
        return cls(type=field_type, values=tuple(str(value) for value in values))


DEFAULT_FIELD_SPEC = FieldSpec()


@dataclass(slots=True, frozen=True)
class AppConfig:
    data_dir: Path | None = None
    field_prefix: str = DEFAULT_FIELD_PREFIX
    field_size: int = 50
    url: str = ""
    site_url: str = ""
    sort_param: str | None = None
    sort_param_reverse: str | None = None
    sort_order: tuple[str, ...] = ()
    type_spec: Mapping[str, FieldSpec] = field(default_factory=dict)
    sidecar_suffix: str = "info"
    content_suffixes: tuple[str, ...] = ("txt", "html", "md")

    def __post_init__(self) -> None:
        if self.data_dir is None:
            object.__setattr__(self, "data_dir", _get_default_data_dir())
        object.__setattr__(self, "type_spec", MappingProxyType(dict(self.type_spec)))
        object.__setattr__(self, "sort_order", tuple(self.sort_order))

    @property
    def fields(self) -> list[str]:
        """Declared field names in a fixed (lexicographic) order."""
        return sorted(self.type_spec)

    def field_spec(self, name: str) -> FieldSpec:
        """Return the declared spec for *name*, or plain ``string`` semantics."""
        try:
            return self._declared_spec(name)
        except UnknownFieldError as exc:
            LOGGER.debug("%s; using string semantics", exc)
            return DEFAULT_FIELD_SPEC

    def _declared_spec(self, name: str) -> FieldSpec:
        if name not in self.type_spec:
            raise UnknownFieldError(name)
        return self.type_spec[name]

    def resolve_data_dir(self, base_dir: Path | None = None) -> Path:
        data_dir = Path(self.data_dir) if self.data_dir is not None else _get_default_data_dir()
        if data_dir.is_absolute() or base_dir is None:
            return data_dir
        return base_dir / data_dir


def config_from_dict(raw: Mapping[str, Any], **overrides: Any) -> AppConfig:
    """Build an :class:`AppConfig` from the Posy-style configuration keys."""
    if not isinstance(raw, Mapping):
        raise ConfigError("Configuration must be a JSON object")

    type_spec_raw = raw.get("info_type_spec") or {}
    if not isinstance(type_spec_raw, Mapping):
        raise ConfigError("info_type_spec must be an object")
    type_spec = {
        str(name): FieldSpec.from_dict(name, spec) for name, spec in type_spec_raw.items()
    }

    sort_spec = raw.get("info_sort_spec") or {}
    if not isinstance(sort_spec, Mapping):
        raise ConfigError("info_sort_spec must be an object")
    sort_order = sort_spec.get("order") or ()
    if not isinstance(sort_order, (list, tuple)):
        raise ConfigError("info_sort_spec.order must be a list")

    try:
        field_size = int(raw.get("infofind_field_size", 50))
    except (TypeError, ValueError) as exc:
        raise ConfigError("infofind_field_size must be an integer") from exc

    values: dict[str, Any] = {
        "field_prefix": raw.get("infofind_field_prefix") or DEFAULT_FIELD_PREFIX,
        "field_size": field_size,
        "url": raw.get("infofind_url") or "",
        "site_url": raw.get("url") or "",
        "sort_param": raw.get("info_sort_param") or None,
        "sort_param_reverse": raw.get("info_sort_param_reverse") or None,
        "sort_order": tuple(str(name) for name in sort_order),
        "type_spec": type_spec,
    }
    if raw.get("data_dir"):
        values["data_dir"] = Path(raw["data_dir"])
    if raw.get("file_extensions"):
        values["content_suffixes"] = tuple(raw["file_extensions"])
    values.update({key: value for key, value in overrides.items() if value is not None})
    return AppConfig(**values)


def load_config(path: Path, **overrides: Any) -> AppConfig:
    """Read a JSON configuration file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    LOGGER.debug("Loaded configuration from %s", path)
    return config_from_dict(raw, **overrides)
