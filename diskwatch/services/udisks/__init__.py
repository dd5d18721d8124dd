"""
UDisks2 drive discovery.

Components:
- PropertyCatalog: one GetManagedObjects round trip, typed property values
- FilesystemEnumerator: flat DriveInfo list, pseudo filesystems filtered out
- deduplicate_by_device: collapses subvolume mounts onto / and /home
"""

from .deduplication import deduplicate_by_device
from .filesystem_enumerator import EXCLUDED_FS_TYPES, FilesystemEnumerator
from .property_catalog import PropertyCatalog
from .property_values import PropertyValue

__all__ = [
    "PropertyCatalog",
    "PropertyValue",
    "FilesystemEnumerator",
    "EXCLUDED_FS_TYPES",
    "deduplicate_by_device",
]
