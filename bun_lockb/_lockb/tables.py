"""Readers for the column-oriented package table and the auxiliary buffers."""

from typing import Dict, List

from ..exceptions import RangeViolationError, TruncatedInputError
from ..logging_config import logger
from .constants import AUXILIARY_BUFFERS, PACKAGE_COLUMNS, ROW_SIZE
from .models import Envelope, PackageView
from .reader import ByteCursor


def read_package_table(cursor: ByteCursor, envelope: Envelope) -> List[PackageView]:
    """
    Read the package table as one view per row.

    Columns are stored one after another, each holding `list_len` fixed-size
    cells. A row is the set of same-index cells across all columns. Row 0 is
    the synthetic root package.

    Raises:
        TruncatedInputError: If a column extends past the lockfile's declared end
    """
    table = cursor.with_limit(envelope.end).seek(envelope.begin_at, "package table")

    table_size = ROW_SIZE * envelope.list_len
    if table_size > table.bytes_remaining():
        raise TruncatedInputError(envelope.begin_at, table_size, table.bytes_remaining(), "package table")

    rows = [PackageView(index=i, columns={}) for i in range(envelope.list_len)]

    for column, stride in PACKAGE_COLUMNS:
        data = table.read_amount(stride * envelope.list_len, f"package column '{column}'")
        for i, row in enumerate(rows):
            row.columns[column] = data[i * stride:(i + 1) * stride]

    return rows


def read_auxiliary_buffers(cursor: ByteCursor, envelope: Envelope) -> Dict[str, memoryview]:
    """
    Read the six variable-length buffers that follow the package table.

    Each buffer is introduced by a `(start, end)` pair of u64 offsets. The
    cursor jumps to `start`, captures the region and continues at `end`,
    where the next pair is expected.

    Raises:
        RangeViolationError: If a pair is inverted
        TruncatedInputError: If a region extends past the data
    """
    cursor.seek(envelope.end_at, "auxiliary buffers")
    buffers: Dict[str, memoryview] = {}

    for name in AUXILIARY_BUFFERS:
        start = cursor.read_u64(f"start of buffer '{name}'")
        end = cursor.read_u64(f"end of buffer '{name}'")

        if start > end:
            raise RangeViolationError(f"Buffer '{name}' has an inverted range {start}..{end}")
        if end > cursor.limit:
            raise TruncatedInputError(start, end - start, max(cursor.limit - start, 0), f"buffer '{name}'")

        cursor.seek(start, f"buffer '{name}'")
        buffers[name] = cursor.read_amount(end - start, f"buffer '{name}'")
        cursor.seek(end, f"buffer '{name}'")

        logger.debug(f"Buffer {name}: {end - start} bytes at {start}")

    return buffers
