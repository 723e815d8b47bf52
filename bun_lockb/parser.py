"""Entry point: binary lockfile bytes in, yarn lockfile v1 text out."""

from ._lockb import decode
from ._lockb.reader import BufferLike
from .yarn_v1 import render_yarn_v1


def parse(data: BufferLike) -> str:
    """
    Parse a `bun.lockb` file and print it in yarn lockfile v1 format.

    Example:
        parse(Path("bun.lockb").read_bytes())  # => "# THIS IS AN AUTOGENERATED FILE..."

    Args:
        data: The binary lockfile contents (bytes, bytearray or memoryview)

    Returns:
        The yarn lockfile v1 text

    Raises:
        LockfileFormatError: If the data is not a valid binary lockfile
    """
    return render_yarn_v1(decode(data))
