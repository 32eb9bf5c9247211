"""Shared models for resource discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable


DEFAULT_SUFFIX = ".gwt.xml"


def _clean_rules(rules: Iterable[str]) -> FrozenSet[str]:
    return frozenset(rule.strip() for rule in rules if rule and rule.strip())


def package_matches(package: str, prefix: str) -> bool:
    """Plain string prefix test, so ``com.google`` also covers ``com.googlecode``."""

    return package.startswith(prefix)


@dataclass(frozen=True, slots=True)
class SearchFilter:
    """Package include/exclude rules applied to scanned resources.

    An empty include set accepts every package. Excludes are tested after
    includes, so a narrower exclude always wins over a broader include.
    """

    include_packages: FrozenSet[str] = field(default_factory=frozenset)
    exclude_packages: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> "SearchFilter":
        return cls(include_packages=_clean_rules(include), exclude_packages=_clean_rules(exclude))

    def is_excluded(self, package: str) -> bool:
        return any(package_matches(package, rule) for rule in self.exclude_packages)

    def accepts(self, package: str) -> bool:
        if self.include_packages and not any(
            package_matches(package, rule) for rule in self.include_packages
        ):
            return False
        return not self.is_excluded(package)


def package_of(resource: str) -> str:
    """Dotted package derived from the directory component of ``resource``."""

    directory, _, _ = resource.rpartition("/")
    return directory.replace("/", ".")


def to_module_name(resource: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Convert ``a/b/c.gwt.xml`` into the logical module name ``a.b.c``."""

    if not resource.endswith(suffix):
        raise ValueError(f"Resource '{resource}' does not end with '{suffix}'")
    return resource.replace("/", ".")[: len(resource) - len(suffix)]


def module_names(resources: Iterable[str], suffix: str = DEFAULT_SUFFIX) -> FrozenSet[str]:
    """Normalize scanned resources into a set of module names."""

    return frozenset(to_module_name(resource, suffix) for resource in resources)


__all__ = [
    "DEFAULT_SUFFIX",
    "SearchFilter",
    "module_names",
    "package_matches",
    "package_of",
    "to_module_name",
]
