"""Merging of normalized entries into one deduplicated working list."""

import logging
import re
from typing import Iterable

from roster import MergeResult, PatternError, WorkingListEntry

log = logging.getLogger(__name__)


def compile_exclusion(pattern: str | None) -> re.Pattern | None:
    """Compile the last-name exclusion expression.

    Args:
        pattern: Regular expression, or None to exclude nothing. An empty
            expression matches every last name.

    Returns:
        Compiled pattern, or None.

    Raises:
        PatternError: If the expression does not compile.
    """
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(f"Invalid exclusion pattern {pattern!r}: {exc}") from exc


def merge_entries(
    church_windows: Iterable[WorkingListEntry],
    onrealm: Iterable[WorkingListEntry],
    exclude: re.Pattern | None = None,
) -> MergeResult:
    """Merge both exports into a working list.

    Entries are keyed by (last name, first name). Church Windows entries are
    inserted first, then OnRealm entries, and a later insert replaces an
    earlier one with the same key, so OnRealm wins whenever a person is in
    both exports. No fields are combined across the two records.

    Args:
        church_windows: Normalized Church Windows entries, in file order.
        onrealm: Normalized OnRealm entries, in file order.
        exclude: Pattern searched in each last name; matches are dropped.

    Returns:
        MergeResult with the surviving entries sorted by key.
    """
    merged: dict[tuple[str, str], WorkingListEntry] = {}
    replaced: list[tuple[str, str]] = []
    counts = []

    for entries in (church_windows, onrealm):
        count = 0
        for entry in entries:
            count += 1
            key = entry.key
            previous = merged.get(key)
            if previous is not None:
                log.debug(
                    "%s, %s: %s entry replaces %s entry",
                    key[0], key[1], entry.source, previous.source,
                )
                replaced.append(key)
            merged[key] = entry
        counts.append(count)

    kept: list[WorkingListEntry] = []
    excluded: list[tuple[str, str]] = []
    for key in sorted(merged):
        if exclude is not None and exclude.search(key[0]):
            excluded.append(key)
            continue
        kept.append(merged[key])

    log.info(
        "Merge finished: %d entries, %d replaced, %d excluded",
        len(kept), len(replaced), len(excluded),
    )
    return MergeResult(
        entries=kept,
        church_windows_count=counts[0],
        onrealm_count=counts[1],
        replaced=replaced,
        excluded=excluded,
    )
