"""Tag-dispatched decoders for resolution records, integrity digests and the meta hash."""

import base64
import struct

from ..exceptions import UndersizedRecordError
from .constants import INTEGRITY_SIZE, META_HASH_SIZE, RESOLUTION_SIZE, IntegrityTag, ResolutionTag
from .models import Resolution
from .strings import StringResolver


def decode_resolution(record: memoryview, resolve: StringResolver) -> Resolution:
    """
    Decode a 64-byte resolution record.

    Only registry (npm) resolutions are understood. Every other tag yields a
    `Resolution` with empty URL and version, which callers render as-is.

    Registry layout: tag at 0, URL slot at 8, major/minor/patch u32 at 16,
    20 and 24, then a 32-byte version tag at 32 holding the pre-release slot
    (bytes 0-7) and the build slot (bytes 16-23).

    Raises:
        UndersizedRecordError: If the record is shorter than 64 bytes
    """
    if len(record) < RESOLUTION_SIZE:
        raise UndersizedRecordError(f"Resolution record is {len(record)} bytes, expected {RESOLUTION_SIZE}")

    tag = record[0]
    if tag != ResolutionTag.NPM:
        return Resolution(tag=tag)

    url = resolve(record[8:16])
    major, minor, patch = struct.unpack_from("<III", record, 16)
    version_tag = record[32:64]
    pre = resolve(version_tag[0:8])
    build = resolve(version_tag[16:24])

    version = f"{major}.{minor}.{patch}"
    if pre:
        version += f"-{pre}"
    if build:
        version += f"+{build}"

    return Resolution(tag=tag, url=url, version=version)


def format_integrity(record: memoryview) -> str:
    """
    Render a 65-byte integrity record as a Subresource Integrity string.

    Returns an empty string when there is no digest (tag 0) or the
    algorithm is not recognized.

    Raises:
        UndersizedRecordError: If the record is shorter than 65 bytes
    """
    if len(record) < INTEGRITY_SIZE:
        raise UndersizedRecordError(f"Integrity record is {len(record)} bytes, expected {INTEGRITY_SIZE}")

    try:
        tag = IntegrityTag(record[0])
    except ValueError:
        return ""

    prefix = tag.sri_prefix
    if not prefix:
        return ""

    return prefix + base64.b64encode(record[1:INTEGRITY_SIZE]).decode("ascii")


def format_meta_hash(data: memoryview) -> str:
    """
    Render the 32-byte lockfile fingerprint as four dash-separated groups.

    The first group is uppercase hex, the other three lowercase, e.g.
    `0011223344556677-8899aabbccddeeff-...`.

    Raises:
        UndersizedRecordError: If fewer than 32 bytes are given
    """
    if len(data) < META_HASH_SIZE:
        raise UndersizedRecordError(f"Meta hash is {len(data)} bytes, expected {META_HASH_SIZE}")

    raw = bytes(data[:META_HASH_SIZE])
    groups = [raw[i:i + 8].hex() for i in range(0, META_HASH_SIZE, 8)]
    groups[0] = groups[0].upper()

    return "-".join(groups)
