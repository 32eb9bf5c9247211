"""High level scan and generate routines."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet

from loguru import logger

from .config import GeneratorSettings
from .generator import generate
from .models import module_names
from .scanner import scan


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a generate run."""

    modules: FrozenSet[str]
    output_path: Path


def run_scan(settings: GeneratorSettings) -> FrozenSet[str]:
    """Discover module names reachable from the configured search path."""

    logger.debug(
        "Scanning with include={} exclude={}",
        sorted(settings.include_packages),
        sorted(settings.exclude_packages),
    )
    resources = scan(settings.search_path, settings.search_filter, settings.suffix)
    return module_names(resources, settings.suffix)


def run_generate(settings: GeneratorSettings) -> GenerationResult:
    """Scan the search path and write the aggregate descriptor."""

    modules = run_scan(settings)
    logger.debug("Found {} gwt modules", len(modules))
    config = settings.generation_config(modules)
    output_path = generate(config, settings.template)
    logger.debug("Generated {}", output_path)
    return GenerationResult(modules=modules, output_path=output_path)


__all__ = ["GenerationResult", "run_generate", "run_scan"]
