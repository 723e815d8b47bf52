"""Pytest configuration and shared fixtures for all tests."""

import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytest

from bun_lockb._lockb.constants import (
    AUXILIARY_BUFFERS,
    DEPENDENCY_RECORD_SIZE,
    MAGIC,
    PACKAGE_COLUMNS,
    ROW_SIZE,
    Behavior,
    IntegrityTag,
    ResolutionTag,
)


@dataclass
class _Row:
    name: bytes
    resolution: bytes
    dependencies: Tuple[int, int]
    meta: bytes


@dataclass
class LockbBuilder:
    """Assembles synthetic binary lockfiles for tests.

    Packages are numbered from 1 in the order they are added; row 0 is the
    root. Dependencies declared by a package are stored contiguously, so the
    package's `dependencies` column can point at them.
    """

    meta_hash: bytes = bytes.fromhex("abcdef0123456789" * 4)
    rows: List[_Row] = field(default_factory=list)
    root_dependencies: Tuple[int, int] = (0, 0)
    string_bytes: bytearray = field(default_factory=bytearray)
    dependency_records: List[bytes] = field(default_factory=list)
    resolution_slots: List[int] = field(default_factory=list)

    # Filled in by build()
    begin_at: int = 0
    end_at: int = 0

    def string(self, value: str) -> bytes:
        """Encode `value` as an 8-byte slot, inline when it fits."""
        data = value.encode("utf-8")
        if len(data) < 8 or (len(data) == 8 and not data[7] & 0x80):
            return data.ljust(8, b"\x00")

        offset = len(self.string_bytes)
        self.string_bytes += data
        return struct.pack("<II", offset, len(data) | 0x80000000)

    def dependency(self, name: str, literal: str, behavior: int = Behavior.NORMAL, resolves_to: int = 0) -> int:
        """Append a dependency record and its resolution slot, returning its record index."""
        record = self.string(name) + bytes(8) + bytes([behavior, 2]) + self.string(literal)
        assert len(record) == DEPENDENCY_RECORD_SIZE

        self.dependency_records.append(record)
        self.resolution_slots.append(resolves_to)

        return len(self.dependency_records) - 1

    def root_requests(self, *requests: Tuple[str, str, int]) -> "LockbBuilder":
        """Declare the root package's dependencies as (name, literal, package index) triples."""
        offset = len(self.dependency_records)
        for name, literal, target in requests:
            self.dependency(name, literal, Behavior.NORMAL, target)
        self.root_dependencies = (offset, len(requests))
        return self

    def package(
        self,
        name: str,
        version: Tuple[int, int, int] = (1, 0, 0),
        pre: str = "",
        build: str = "",
        url: Optional[str] = None,
        integrity: Tuple[int, bytes] = (IntegrityTag.SHA512, bytes(range(64))),
        tag: int = ResolutionTag.NPM,
        dependencies: Tuple[Tuple[str, str, int, int], ...] = (),
    ) -> int:
        """
        Add a package row and return its index.

        `dependencies` holds (name, literal, behavior, resolves_to) tuples.
        """
        if url is None:
            url = f"https://registry.npmjs.org/{name}/-/{name}-{'.'.join(map(str, version))}.tgz"

        resolution = bytearray(64)
        resolution[0] = tag
        if tag == ResolutionTag.NPM:
            resolution[8:16] = self.string(url)
            struct.pack_into("<III", resolution, 16, *version)
            resolution[32:40] = self.string(pre)
            resolution[48:56] = self.string(build)

        meta = bytearray(88)
        meta[20] = integrity[0]
        meta[21:85] = integrity[1].ljust(64, b"\x00")

        offset = len(self.dependency_records)
        for dep_name, literal, behavior, target in dependencies:
            self.dependency(dep_name, literal, behavior, target)

        self.rows.append(
            _Row(
                name=self.string(name),
                resolution=bytes(resolution),
                dependencies=(offset, len(dependencies)),
                meta=bytes(meta),
            )
        )

        return len(self.rows)

    def build(
        self,
        magic: bytes = MAGIC,
        format_version: int = 2,
        list_len: Optional[int] = None,
        input_alignment: int = 8,
        field_count: int = 8,
    ) -> bytes:
        root = _Row(name=bytes(8), resolution=b"\x01" + bytes(63), dependencies=self.root_dependencies, meta=bytes(88))
        rows = [root] + self.rows
        count = len(rows)

        header_size = len(magic) + 4 + 32 + 8 * 6
        self.begin_at = (header_size + 7) // 8 * 8
        self.end_at = self.begin_at + ROW_SIZE * count

        columns = {
            "name": b"".join(r.name for r in rows),
            "name_hash": bytes(8 * count),
            "resolution": b"".join(r.resolution for r in rows),
            "dependencies": b"".join(struct.pack("<II", *r.dependencies) for r in rows),
            "resolutions": bytes(8 * count),
            "meta": b"".join(r.meta for r in rows),
            "bin": bytes(20 * count),
            "scripts": bytes(48 * count),
        }
        table = b"".join(columns[name] for name, _ in PACKAGE_COLUMNS)

        regions = {
            "trees": b"",
            "hoisted_dependencies": b"",
            "resolutions": b"".join(struct.pack("<I", slot) for slot in self.resolution_slots),
            "dependencies": b"".join(self.dependency_records),
            "extern_strings": b"",
            "string_bytes": bytes(self.string_bytes),
        }
        buffers = bytearray()
        position = self.end_at
        for name in AUXILIARY_BUFFERS:
            data = regions[name]
            start = position + 16
            end = start + len(data)
            buffers += struct.pack("<QQ", start, end) + data
            position = end

        total = position
        header = (
            magic
            + struct.pack("<I", format_version)
            + self.meta_hash
            + struct.pack(
                "<QQQQQQ",
                total,
                count if list_len is None else list_len,
                input_alignment,
                field_count,
                self.begin_at,
                self.end_at,
            )
        )

        return header.ljust(self.begin_at, b"\x00") + table + bytes(buffers)


@pytest.fixture
def builder() -> LockbBuilder:
    return LockbBuilder()


@pytest.fixture
def lodash_lockfile(builder: LockbBuilder) -> bytes:
    """Root depends on lodash, which is requested twice with the same range."""
    builder.root_requests(("lodash", "^4.17.0", 1), ("lodash", "^4.17.0", 1))
    builder.package("lodash", version=(4, 17, 21))
    return builder.build()
