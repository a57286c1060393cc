# mirrorsync Utilities Module
# Helpers for log parsing

from mirrorsync.utils.size import (
    RSYNC_SIZE_PATTERN,
    extract_size_from_log,
    extract_size_from_rsync_log,
)

__all__ = [
    "RSYNC_SIZE_PATTERN",
    "extract_size_from_log",
    "extract_size_from_rsync_log",
]
