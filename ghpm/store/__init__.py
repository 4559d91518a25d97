"""Package storage: directory layout and manifest records."""

from ghpm.store.layout import PackageLayout
from ghpm.store.manifests import ManifestStore

__all__ = [
    "PackageLayout",
    "ManifestStore",
]
