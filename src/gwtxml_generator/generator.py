"""Rendering of the aggregate GWT module descriptor."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateError
from loguru import logger

from .config import GenerationConfig

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
TEMPLATE_NAME = "gwt.xml.j2"


class GeneratorError(Exception):
    """Base class for failures while generating the descriptor."""


class AlreadyExists(GeneratorError, FileExistsError):
    """Raised when the output path is already taken by a file or directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path.absolute()} already exists or is a directory")
        self.path = path


class TemplateUnavailable(GeneratorError):
    """Raised when the descriptor template cannot be read or parsed."""


def _environment(template_path: Path) -> Environment:
    loader = FileSystemLoader(str(template_path.parent), encoding="utf-8")
    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def load_template(template_path: Path | None = None) -> Template:
    """Load the descriptor template, the bundled one unless a path is given."""

    if template_path is None:
        template_path = TEMPLATE_DIR / TEMPLATE_NAME
    try:
        return _environment(template_path).get_template(template_path.name)
    except (TemplateError, OSError, UnicodeDecodeError) as exc:
        raise TemplateUnavailable(f"Unable to read template {template_path}: {exc}") from exc


def render(config: GenerationConfig, template_path: Path | None = None) -> str:
    """Render the descriptor text for ``config`` without touching the output path."""

    template = load_template(template_path)
    try:
        return template.render(
            config=config,
            modules=config.sorted_modules,
            entry_point=config.entry_point,
            style_sheet=config.style_sheet,
            logging_enabled=config.logging_enabled,
        )
    except TemplateError as exc:
        raise TemplateUnavailable(f"Unable to render template: {exc}") from exc


def generate(config: GenerationConfig, template_path: Path | None = None) -> Path:
    """Write the descriptor to ``config.output_path`` and return that path.

    Never overwrites: an existing file or directory at the target raises
    :class:`AlreadyExists` before anything is written.
    """

    output_path = config.output_path
    if output_path.exists():
        raise AlreadyExists(output_path)

    content = render(config, template_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        handle = output_path.open("x", encoding="utf-8", newline="\n")
    except FileExistsError as exc:
        raise AlreadyExists(output_path) from exc
    try:
        with handle:
            handle.write(content)
    except BaseException:
        output_path.unlink(missing_ok=True)
        raise

    logger.debug("Wrote {} modules to {}", len(config.module_names), output_path)
    return output_path


__all__ = [
    "AlreadyExists",
    "GeneratorError",
    "TemplateUnavailable",
    "generate",
    "load_template",
    "render",
]
