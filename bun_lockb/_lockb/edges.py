"""Dependency edges: which declarations resolved to a package, and what a package declares."""

from typing import List

from ..exceptions import RangeViolationError
from .constants import DEPENDENCY_RECORD_SIZE
from .reader import read_u32_array, read_u32_pair


def build_requested_versions(
    resolutions: memoryview, dependencies: memoryview, list_len: int
) -> List[List[memoryview]]:
    """
    For every package index, collect the dependency records that resolved to it.

    `resolutions` is a u32 array parallel to the 26-byte records in
    `dependencies`: slot `k` names the package that record `k` resolved to.
    For each target package the scan walks both arrays with two cursors,
    moving them past each match in lockstep so that a slot and its record
    always stay paired.

    The result is indexed by package. Index 0 (the root) is always empty.
    Records that would extend past `dependencies` end the scan for that
    package instead of raising.
    """
    slots = read_u32_array(resolutions)
    requested: List[List[memoryview]] = [[] for _ in range(list_len)]

    for i in range(1, list_len):
        found = requested[i]
        slot_cursor = 0
        record_cursor = 0

        while True:
            try:
                k = slots.index(i, slot_cursor) - slot_cursor
            except ValueError:
                break

            start = record_cursor + k * DEPENDENCY_RECORD_SIZE
            end = start + DEPENDENCY_RECORD_SIZE
            if end > len(dependencies):
                break

            found.append(dependencies[start:end])
            record_cursor = end
            slot_cursor += k + 1

    return requested


def slice_dependencies(dependencies: memoryview, slice_ref: memoryview) -> List[memoryview]:
    """
    Resolve a package's `dependencies` column into its 26-byte records.

    The column holds a little-endian `(offset, length)` pair counted in
    records, not bytes.

    Raises:
        RangeViolationError: If the referenced records lie outside the buffer
    """
    offset, length = read_u32_pair(slice_ref)
    start = offset * DEPENDENCY_RECORD_SIZE
    end = start + length * DEPENDENCY_RECORD_SIZE

    if end > len(dependencies):
        raise RangeViolationError(
            f"Dependency list {offset}+{length} lies outside the dependencies buffer "
            f"({len(dependencies) // DEPENDENCY_RECORD_SIZE} records)"
        )

    return [dependencies[pos:pos + DEPENDENCY_RECORD_SIZE] for pos in range(start, end, DEPENDENCY_RECORD_SIZE)]
