"""Aggregate GWT module descriptors found on a search path into one descriptor."""

from .config import ConfigError, GenerationConfig, GeneratorSettings, load_settings
from .generator import AlreadyExists, GeneratorError, TemplateUnavailable, generate
from .models import SearchFilter, module_names, to_module_name
from .scanner import ScanIOError, scan

__all__ = [
    "AlreadyExists",
    "ConfigError",
    "GenerationConfig",
    "GeneratorError",
    "GeneratorSettings",
    "ScanIOError",
    "SearchFilter",
    "TemplateUnavailable",
    "generate",
    "load_settings",
    "module_names",
    "scan",
    "to_module_name",
]
