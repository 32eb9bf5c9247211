"""Discovery of module descriptor resources on a search path."""

from __future__ import annotations

import os
import sys
import zipfile
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Set

from loguru import logger

from .models import DEFAULT_SUFFIX, SearchFilter, package_of


class ScanIOError(OSError):
    """Raised when a single search-path location cannot be read."""

    def __init__(self, location: Path, reason: object) -> None:
        super().__init__(f"Unable to read {location}: {reason}")
        self.location = location


def default_search_path() -> List[Path]:
    """The interpreter's own resource lookup set."""

    return [Path(entry) if entry else Path.cwd() for entry in sys.path]


def _walk_directory(root: Path, search_filter: SearchFilter) -> Iterator[str]:
    def _on_error(exc: OSError) -> None:
        if Path(exc.filename or "") == root:
            raise ScanIOError(root, exc)
        logger.debug("Skipping unreadable directory {}: {}", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        relative_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if relative_dir == "." else relative_dir + "/"

        # Anything below an excluded package is excluded as well.
        dirnames[:] = sorted(
            name
            for name in dirnames
            if not search_filter.is_excluded((prefix + name).replace("/", "."))
        )
        for name in filenames:
            yield prefix + name


def _walk_archive(archive: Path) -> Iterator[str]:
    try:
        with zipfile.ZipFile(archive) as handle:
            names = handle.namelist()
    except (OSError, zipfile.BadZipFile) as exc:
        raise ScanIOError(archive, exc) from exc
    for name in names:
        if not name.endswith("/"):
            yield name.lstrip("/")


def _iter_location(location: Path, search_filter: SearchFilter) -> Iterator[str]:
    if location.is_dir():
        yield from _walk_directory(location, search_filter)
    elif location.is_file() and zipfile.is_zipfile(location):
        yield from _walk_archive(location)
    elif location.exists():
        logger.debug("Ignoring search path entry {}: not a directory or archive", location)


def scan(
    search_path: Sequence[Path | str] | None,
    search_filter: SearchFilter | None = None,
    suffix: str = DEFAULT_SUFFIX,
) -> Set[str]:
    """Return every resource on ``search_path`` accepted by the filter and ending in ``suffix``.

    An empty ``search_path`` scans the interpreter's search path. Locations
    that do not exist contribute nothing; unreadable ones are logged and
    skipped.
    """

    search_filter = search_filter or SearchFilter()
    locations: Iterable[Path] = (
        [Path(entry) for entry in search_path] if search_path else default_search_path()
    )

    found: Set[str] = set()
    for location in locations:
        logger.debug("Scanning {}", location)
        try:
            for resource in _iter_location(location, search_filter):
                if not search_filter.accepts(package_of(resource)):
                    continue
                if resource.endswith(suffix):
                    found.add(resource)
        except ScanIOError as exc:
            logger.warning("{}", exc)
        except OSError as exc:
            logger.warning("Unable to read {}: {}", location, exc)
    logger.debug("Scan finished with {} matching resources", len(found))
    return found


__all__ = ["ScanIOError", "default_search_path", "scan"]
