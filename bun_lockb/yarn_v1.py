"""Rendering of a decoded lockfile as yarn lockfile v1 text."""

import json
import re
from typing import Iterable, List, Optional

from ._lockb.constants import Behavior
from ._lockb.models import Dependency, Lockfile, Package

HEADER = (
    "# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.",
    "# yarn lockfile v1",
)
HASH_COMMENT = "# bun ./bun.lockb --hash: "

# First matching flag wins
SECTION_HEADERS = (
    (Behavior.OPTIONAL, "  optionalDependencies:"),
    (Behavior.NORMAL, "  dependencies:"),
    (Behavior.DEV, "  devDependencies:"),
)

_NEEDS_QUOTES = re.compile(r'[:\s\\",\[\]]')
_STARTS_WITH_DIGIT = re.compile(r"^[0-9]")
_STARTS_WITH_LETTER = re.compile(r"^[a-zA-Z]")


def quote(value: str) -> str:
    """Quote a key the way yarn does, leaving plain identifiers bare."""
    if (
        value.startswith("true")
        or value.startswith("false")
        or _NEEDS_QUOTES.search(value)
        or _STARTS_WITH_DIGIT.match(value)
        or not _STARTS_WITH_LETTER.match(value)
    ):
        return _json_string(value)
    return value


def format_specifiers(name: str, requested: Iterable[str], version: str) -> str:
    """
    Build the `name@spec, name@spec:` line that opens a package entry.

    Duplicate specifiers are merged, keeping first-seen order. An empty
    specifier stands for a caret range on the resolved version.
    """
    specs = dict.fromkeys(spec or f"^{version}" for spec in requested)
    return ", ".join(quote(f"{name}@{spec}") for spec in specs) + ":"


def render_yarn_v1(lockfile: Lockfile) -> str:
    """
    Render a decoded lockfile as yarn lockfile v1 text.

    Args:
        lockfile: The decoded lockfile

    Returns:
        The complete text, ending with a newline
    """
    lines = [*HEADER, HASH_COMMENT + lockfile.meta_hash, ""]

    for package in lockfile.packages:
        lines.append("")
        lines.extend(_render_package(package))

    lines.append("")

    return "\n".join(lines)


def _render_package(package: Package) -> List[str]:
    lines = [
        format_specifiers(package.name, package.requested_versions, package.version),
        f"  version {_json_string(package.version)}",
        f"  resolved {_json_string(package.url)}",
    ]

    if package.integrity:
        lines.append(f"  integrity {package.integrity}")

    lines.extend(_render_dependencies(package.dependencies))

    return lines


def _render_dependencies(dependencies: List[Dependency]) -> List[str]:
    """
    Group dependencies under section headers.

    A header is written whenever the raw behavior byte changes. Entries whose
    behavior is neither optional, normal nor dev (peer or workspace only) are
    left out together with their header.
    """
    lines: List[str] = []
    current = Behavior.UNSET

    for dependency in dependencies:
        if dependency.behavior != current:
            header = _section_header(dependency.behavior)
            if header is None:
                continue
            lines.append(header)
            current = dependency.behavior

        lines.append(f'    {quote(dependency.name)} "{dependency.literal}"')

    return lines


def _section_header(behavior: int) -> Optional[str]:
    for flag, header in SECTION_HEADERS:
        if behavior & flag:
            return header
    return None


def _json_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
