"""
TODOSTER - Index Range Parser
=============================
Turns user input such as "0,2-4,7" into a set of task indices.

Ranges are inclusive. An inverted range ("5-3") is rejected rather than
swapped. Nothing here touches the task list; the length is only used to
check bounds, and ranges are checked before they are expanded.
"""

import re
from typing import Iterable, List, Optional, Set, Tuple

from .errors import ParseError, IndexOutOfRange

_INDEX_RE = re.compile(r"^\d+$")
_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")

IndexRange = Tuple[int, int]


def parse_index(token: str) -> int:
    """Parse a single non-negative index"""
    value = token.strip()
    if not _INDEX_RE.match(value):
        raise ParseError(f"Invalid index: '{token}'", token=token)
    return int(value)


def parse_index_ranges(spec: str) -> List[IndexRange]:
    """Parse comma-separated indices and ranges into (start, end) pairs"""
    ranges: List[IndexRange] = []

    for part in spec.split(","):
        token = part.strip()
        if not token:
            continue

        match = _RANGE_RE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                raise ParseError(
                    f"Invalid range '{token}': start is greater than end",
                    token=token
                )
            ranges.append((start, end))
        elif _INDEX_RE.match(token):
            index = int(token)
            ranges.append((index, index))
        else:
            raise ParseError(f"Invalid index or range: '{token}'", token=token)

    if not ranges:
        raise ParseError(f"No indexes supplied: '{spec}'", token=spec)

    return ranges


def expand_ranges(ranges: Iterable[IndexRange], length: Optional[int] = None) -> Set[int]:
    """
    Expand (start, end) pairs into a set of indices.

    With a length, the smallest index past the end of the list raises
    IndexOutOfRange before anything is expanded.
    """
    ranges = list(ranges)
    if length is not None:
        past_end = [max(start, length) for start, end in ranges if end >= length]
        if past_end:
            raise IndexOutOfRange(min(past_end), length)

    indices: Set[int] = set()
    for start, end in ranges:
        indices.update(range(start, end + 1))
    return indices


def parse_index_list(spec: str) -> Set[int]:
    """Parse comma-separated indices and inclusive ranges into a set"""
    return expand_ranges(parse_index_ranges(spec))


def check_indices(indices: Set[int], length: int) -> None:
    """Raise IndexOutOfRange for the smallest index past the end of the list"""
    for index in sorted(indices):
        if index < 0 or index >= length:
            raise IndexOutOfRange(index, length)


def resolve_indices(spec: str, length: int) -> Set[int]:
    """Parse a range expression and validate it against a list of `length` tasks"""
    return expand_ranges(parse_index_ranges(spec), length)
