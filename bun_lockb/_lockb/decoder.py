"""Single-pass decoder from binary lockfile bytes to a `Lockfile` model."""

from ..logging_config import logger
from .constants import (
    DEPENDENCY_BEHAVIOR,
    DEPENDENCY_LITERAL,
    DEPENDENCY_NAME,
    DEPENDENCY_TAG,
    INTEGRITY_OFFSET,
    INTEGRITY_SIZE,
)
from .decoders import decode_resolution, format_integrity, format_meta_hash
from .edges import build_requested_versions, slice_dependencies
from .envelope import read_envelope
from .models import Dependency, Lockfile, Package
from .reader import BufferLike, ByteCursor
from .strings import StringResolver
from .tables import read_auxiliary_buffers, read_package_table


def decode(data: BufferLike) -> Lockfile:
    """
    Decode a binary lockfile.

    Args:
        data: The complete lockfile contents

    Returns:
        The decoded lockfile, without the synthetic root package

    Raises:
        LockfileFormatError: If the data is malformed (see `bun_lockb.exceptions`)
    """
    cursor = ByteCursor(data)

    envelope = read_envelope(cursor)
    rows = read_package_table(cursor, envelope)
    buffers = read_auxiliary_buffers(cursor, envelope)

    resolve = StringResolver(buffers["string_bytes"])
    dependency_data = buffers["dependencies"]
    requested = build_requested_versions(buffers["resolutions"], dependency_data, envelope.list_len)

    lockfile = Lockfile(meta_hash=format_meta_hash(envelope.meta_hash))

    for row in rows[1:]:
        resolution = decode_resolution(row.resolution, resolve)

        lockfile.packages.append(
            Package(
                index=row.index,
                name=resolve(row.name),
                resolution=resolution,
                integrity=format_integrity(row.meta[INTEGRITY_OFFSET:INTEGRITY_OFFSET + INTEGRITY_SIZE]),
                dependencies=[
                    _decode_dependency(record, resolve)
                    for record in slice_dependencies(dependency_data, row.dependencies)
                ],
                requested_versions=[resolve(record[DEPENDENCY_LITERAL]) for record in requested[row.index]],
            )
        )

    logger.debug(f"Decoded {len(lockfile.packages)} package(s)")

    return lockfile


def _decode_dependency(record: memoryview, resolve: StringResolver) -> Dependency:
    return Dependency(
        name=resolve(record[DEPENDENCY_NAME]),
        behavior=record[DEPENDENCY_BEHAVIOR],
        tag=record[DEPENDENCY_TAG],
        literal=resolve(record[DEPENDENCY_LITERAL]),
    )
