"""Configuration loading and validation for the GWT module generator."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import DEFAULT_SUFFIX, SearchFilter

DEFAULT_EXCLUDE_PACKAGES = frozenset({"com.google", "elemental", "java.util", "java.lang"})
DEFAULT_GWT_XML_PATH = "org/eclipse/che/ide/IDE.gwt.xml"
DEFAULT_ENTRY_POINT = "org.eclipse.che.ide.client.IDE"
DEFAULT_STYLE_SHEET = "IDE.css"

# Options that keep every value; all others use only the first one.
_MULTI_VALUE_OPTIONS = {"excludePackages", "includePackages", "searchPath"}


class ConfigError(Exception):
    """Raised when generator options or a configuration file are invalid."""


def _split_values(values: Iterable[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        result.extend(part.strip() for part in str(value).split(",") if part.strip())
    return result


class GeneratorSettings(BaseModel):
    """Settings for one scan-and-generate run.

    Field aliases are the option names accepted on the command line and in
    YAML files.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    exclude_packages: FrozenSet[str] = Field(
        default=DEFAULT_EXCLUDE_PACKAGES, alias="excludePackages"
    )
    include_packages: FrozenSet[str] = Field(default_factory=frozenset, alias="includePackages")
    root_dir: Path = Field(default=Path("."), alias="rootDir")
    gwt_file_name: str = Field(default=DEFAULT_GWT_XML_PATH, alias="gwtFileName")
    entry_point: str = Field(default=DEFAULT_ENTRY_POINT, alias="entryPoint")
    style_sheet: str = Field(default=DEFAULT_STYLE_SHEET, alias="styleSheet")
    logging_enabled: bool = Field(default=False, alias="loggingEnabled")
    search_path: List[Path] = Field(default_factory=list, alias="searchPath")
    suffix: str = DEFAULT_SUFFIX
    template: Optional[Path] = None

    @field_validator("exclude_packages", "include_packages", mode="before")
    @classmethod
    def _split_packages(cls, value: Any) -> Any:
        if isinstance(value, str):
            return frozenset(_split_values([value]))
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(_split_values(value))
        return value

    @field_validator("search_path", mode="before")
    @classmethod
    def _split_search_path(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _split_values([value])
        return value

    @field_validator("logging_enabled", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)

    @field_validator("suffix")
    @classmethod
    def _require_suffix(cls, value: str) -> str:
        if not value:
            raise ValueError("Resource suffix cannot be empty")
        return value

    @property
    def search_filter(self) -> SearchFilter:
        return SearchFilter.build(self.include_packages, self.exclude_packages)

    def generation_config(self, modules: Iterable[str]) -> "GenerationConfig":
        """Freeze these settings together with the discovered module names."""

        return GenerationConfig(
            module_names=frozenset(modules),
            output_root=self.root_dir,
            output_file_name=self.gwt_file_name,
            entry_point=self.entry_point,
            style_sheet=self.style_sheet,
            logging_enabled=self.logging_enabled,
        )


class GenerationConfig(BaseModel):
    """Immutable input of a single descriptor generation."""

    model_config = ConfigDict(frozen=True)

    module_names: FrozenSet[str]
    output_root: Path = Path(".")
    output_file_name: str = DEFAULT_GWT_XML_PATH
    entry_point: str = DEFAULT_ENTRY_POINT
    style_sheet: str = DEFAULT_STYLE_SHEET
    logging_enabled: bool = False

    @property
    def output_path(self) -> Path:
        return self.output_root / self.output_file_name

    @property
    def sorted_modules(self) -> List[str]:
        return sorted(self.module_names)


def parse_args(argv: Sequence[str]) -> Dict[str, List[str]]:
    """Collect ``--key=value`` arguments into a mapping of option to values.

    Feeds :func:`load_settings` for callers that pass a raw argv, such as
    ``python -m gwtxml_generator``.
    """

    parsed: Dict[str, List[str]] = {}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        if key:
            parsed.setdefault(key, []).append(value)
    return parsed


def _normalize_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            values = list(value)
            if not values:
                continue
            normalized[key] = values if key in _MULTI_VALUE_OPTIONS else values[0]
        else:
            normalized[key] = value
    return normalized


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def load_settings(
    options: Mapping[str, Any] | None = None, config_file: Path | None = None
) -> GeneratorSettings:
    """Build settings from an optional YAML file overridden by ``options``."""

    merged: Dict[str, Any] = {}
    if config_file is not None:
        merged.update(_normalize_options(_read_config_file(config_file)))
    if options:
        merged.update(_normalize_options(options))

    try:
        return GeneratorSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def save_settings(settings: GeneratorSettings, path: Path) -> None:
    """Persist settings to disk as YAML using the option names."""

    rendered = settings.model_dump(mode="json", by_alias=True)
    for key in ("excludePackages", "includePackages"):
        rendered[key] = sorted(rendered[key])
    path.write_text(yaml.safe_dump(rendered, sort_keys=False), encoding="utf-8")


__all__ = [
    "ConfigError",
    "DEFAULT_ENTRY_POINT",
    "DEFAULT_EXCLUDE_PACKAGES",
    "DEFAULT_GWT_XML_PATH",
    "DEFAULT_STYLE_SHEET",
    "GenerationConfig",
    "GeneratorSettings",
    "load_settings",
    "parse_args",
    "save_settings",
]
