"""Shared `--path` / `--package name@version` resolution for package commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def parse_package_ref(s: str) -> tuple[str, str]:
    """Parse 'name@version'."""
    if "@" not in s:
        raise ValueError("expected format name@version")
    name, version = s.split("@", 1)
    name = name.strip()
    version = version.strip()
    if not name or not version:
        raise ValueError("expected format name@version")
    return name, version


def resolve_root(*, path: Optional[str], package: Optional[str]) -> Path:
    if bool(path) == bool(package):
        raise ValueError("specify exactly one of --path or --package")
    if path:
        return Path(path)
    name, version = parse_package_ref(str(package))
    return Path("packages") / name / version
