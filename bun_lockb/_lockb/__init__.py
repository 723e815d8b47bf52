"""Binary lockfile decoding.

Reads `bun.lockb` data into a `Lockfile` model:

- the envelope is validated (magic, format, offsets)
- the column-oriented package table is split into per-row views
- the auxiliary buffers are located
- strings, resolutions, integrity digests and dependency edges are decoded

Example usage:
    from bun_lockb._lockb import decode

    lockfile = decode(Path("bun.lockb").read_bytes())
    for package in lockfile.packages:
        print(package.name, package.version)
"""

from .constants import Behavior, IntegrityTag, ResolutionTag
from .decoder import decode
from .models import Dependency, Envelope, Lockfile, Package, PackageView, Resolution

__all__ = [
    # Main API
    "decode",
    # Models
    "Lockfile",
    "Package",
    "PackageView",
    "Dependency",
    "Resolution",
    "Envelope",
    # Tags
    "Behavior",
    "IntegrityTag",
    "ResolutionTag",
]
