"""Reader for the fixed-layout envelope at the start of a binary lockfile."""

from ..exceptions import EnvelopeMismatchError, OversizedTableError, RangeViolationError, TruncatedInputError
from ..logging_config import logger
from .constants import FIELD_COUNT, FORMAT_VERSION, INPUT_ALIGNMENT, MAGIC, MAX_LIST_LEN, META_HASH_SIZE
from .models import Envelope
from .reader import ByteCursor


def read_envelope(cursor: ByteCursor) -> Envelope:
    """
    Read and validate the envelope, leaving the cursor just past it.

    Args:
        cursor: Cursor positioned at the start of the lockfile

    Returns:
        The validated envelope

    Raises:
        TruncatedInputError: If the data ends inside the envelope, or before its declared end
        EnvelopeMismatchError: If the magic, format, alignment or field count is wrong
        OversizedTableError: If the package count is impossibly large
        RangeViolationError: If the package table range is inconsistent
    """
    cursor.expect_magic(MAGIC, "lockfile banner")

    format_version = cursor.read_u32("format version")
    if format_version != FORMAT_VERSION:
        raise EnvelopeMismatchError(
            f"Outdated lockfile version: format {format_version}, only {FORMAT_VERSION} is supported"
        )

    meta_hash = cursor.read_amount(META_HASH_SIZE, "meta hash")

    end = cursor.read_u64("end offset")
    if end > cursor.limit:
        raise TruncatedInputError(0, end, cursor.limit, "lockfile data (lockfile is missing data)")

    list_len = cursor.read_u64("package count")
    if list_len >= MAX_LIST_LEN:
        raise OversizedTableError(f"Lockfile validation failed: list is impossibly long ({list_len} packages)")

    input_alignment = cursor.read_u64("input alignment")
    if input_alignment != INPUT_ALIGNMENT:
        raise EnvelopeMismatchError(f"Unexpected input alignment {input_alignment}, expected {INPUT_ALIGNMENT}")

    field_count = cursor.read_u64("field count")
    if field_count != FIELD_COUNT:
        raise EnvelopeMismatchError(f"Unexpected package field count {field_count}, expected {FIELD_COUNT}")

    begin_at = cursor.read_u64("package list start")
    end_at = cursor.read_u64("package list end")
    if not (begin_at <= end_at <= end):
        raise RangeViolationError(
            f"Lockfile validation failed: invalid package list range {begin_at}..{end_at} (end is {end})"
        )

    logger.debug(f"Envelope: format={format_version} packages={list_len} table={begin_at}..{end_at} end={end}")

    return Envelope(
        format=format_version,
        meta_hash=meta_hash,
        end=end,
        list_len=list_len,
        input_alignment=input_alignment,
        field_count=field_count,
        begin_at=begin_at,
        end_at=end_at,
    )
