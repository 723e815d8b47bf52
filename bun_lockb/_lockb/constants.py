"""Layout constants and tag enumerations for the binary lockfile.

Shared by the decoders and the yarn v1 emitter so every tag value lives in
exactly one place.
"""

from enum import IntEnum, IntFlag

MAGIC = b"#!/usr/bin/env bun\nbun-lockfile-format-v0\n"
FORMAT_VERSION = 2
INPUT_ALIGNMENT = 8
FIELD_COUNT = 8
MAX_LIST_LEN = 2**32

META_HASH_SIZE = 32
STRING_SLOT_SIZE = 8
DEPENDENCY_RECORD_SIZE = 26

# Package table columns in on-disk order, with their per-row stride
PACKAGE_COLUMNS = (
    ("name", 8),
    ("name_hash", 8),
    ("resolution", 64),
    ("dependencies", 8),
    ("resolutions", 8),
    ("meta", 88),
    ("bin", 20),
    ("scripts", 48),
)
ROW_SIZE = sum(stride for _, stride in PACKAGE_COLUMNS)

AUXILIARY_BUFFERS = (
    "trees",
    "hoisted_dependencies",
    "resolutions",
    "dependencies",
    "extern_strings",
    "string_bytes",
)

RESOLUTION_SIZE = 64
INTEGRITY_OFFSET = 20
INTEGRITY_SIZE = 65

# Offsets inside a 26-byte dependency record
DEPENDENCY_NAME = slice(0, 8)
DEPENDENCY_BEHAVIOR = 16
DEPENDENCY_TAG = 17
DEPENDENCY_LITERAL = slice(18, 26)


class ResolutionTag(IntEnum):
    """Discriminant stored in byte 0 of a resolution record."""

    UNINITIALIZED = 0
    ROOT = 1
    NPM = 2
    FOLDER = 4
    LOCAL_TARBALL = 8
    GITHUB = 16
    GITLAB = 24
    GIT = 32
    SYMLINK = 64
    WORKSPACE = 72
    REMOTE_TARBALL = 80
    SINGLE_FILE_MODULE = 100


class IntegrityTag(IntEnum):
    """Digest algorithm stored in byte 0 of an integrity record."""

    UNKNOWN = 0
    SHA1 = 1
    SHA256 = 2
    SHA384 = 3
    SHA512 = 4

    @property
    def sri_prefix(self) -> str:
        """Subresource Integrity prefix, empty when there is no digest."""
        return _SRI_PREFIXES.get(self, "")


_SRI_PREFIXES = {
    IntegrityTag.SHA1: "sha1-",
    IntegrityTag.SHA256: "sha256-",
    IntegrityTag.SHA384: "sha384-",
    IntegrityTag.SHA512: "sha512-",
}


class Behavior(IntFlag):
    """Bitflags classifying a dependency declaration."""

    UNSET = 0
    NORMAL = 0b10
    OPTIONAL = 0b100
    DEV = 0b1000
    PEER = 0b10000
    WORKSPACE = 0b100000
