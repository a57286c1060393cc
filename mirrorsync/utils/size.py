# mirrorsync Size Extraction
# Parse the transferred data size out of a finished job's log

import re

RSYNC_SIZE_PATTERN = re.compile(rb"^Total file size: ([0-9\.]+[KMGTP]?) bytes", re.MULTILINE)


def extract_size_from_log(content: bytes, pattern: re.Pattern | str | bytes) -> str:
    """
    Extract a size string from log content.

    Args:
        content: Raw log file content.
        pattern: Regex whose first group captures the size.

    Returns:
        The first group of the last match, or "" if nothing matched.
    """
    if isinstance(pattern, str):
        pattern = pattern.encode("utf-8")
    if isinstance(pattern, bytes):
        pattern = re.compile(pattern, re.MULTILINE)

    matches = pattern.findall(content)
    if not matches:
        return ""
    last = matches[-1]
    # findall returns tuples when the pattern has several groups
    if isinstance(last, tuple):
        last = last[0]
    return last.decode("utf-8", errors="replace")


def extract_size_from_rsync_log(content: bytes) -> str:
    """Extract the `Total file size` reported by `rsync --stats`."""
    return extract_size_from_log(content, RSYNC_SIZE_PATTERN)
