"""propres package bundle I/O (package-on-disk format).

- Save/load the entries table as CSV under `tables/`
- Preserve the raw `.properties` source and global notes under `raw/`
- Write/read `manifest.json` with sha256 hashes for reproducibility
"""

from __future__ import annotations

from .io import PackageBundle, load_package, save_package

__all__ = [
    "PackageBundle",
    "save_package",
    "load_package",
]
