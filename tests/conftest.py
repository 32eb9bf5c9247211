from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable

import pytest

DESCRIPTOR = '<?xml version="1.0" encoding="UTF-8"?>\n<module/>\n'


def create_descriptor(root: Path, resource: str) -> Path:
    path = root / resource
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DESCRIPTOR, encoding="utf-8")
    return path


def create_archive(path: Path, resources: Iterable[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for resource in resources:
            archive.writestr(resource, DESCRIPTOR)
    return path


@pytest.fixture()
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "classes"
    for resource in (
        "org/eclipse/che/ide/Api.gwt.xml",
        "org/eclipse/che/ide/ext/java/Java.gwt.xml",
        "org/eclipse/che/plugin/Plugin.gwt.xml",
        "com/google/gwt/user/User.gwt.xml",
        "elemental/Elemental.gwt.xml",
        "org/eclipse/che/ide/Api.java",
        "org/eclipse/che/ide/IDE.css",
    ):
        create_descriptor(root, resource)
    return root
