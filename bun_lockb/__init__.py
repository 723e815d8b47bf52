"""bun-lockb: print bun's binary lockfile as a yarn v1 lockfile."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("bun-lockb")
    except ImportError:
        pass
    except PackageNotFoundError:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("tool", {}).get("poetry", {}).get("version", "unknown")
    except ImportError:
        # Python < 3.11 doesn't have tomllib
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()

from ._lockb import decode  # noqa: E402
from .parser import parse  # noqa: E402
from .yarn_v1 import render_yarn_v1  # noqa: E402

__all__ = ["__version__", "decode", "parse", "render_yarn_v1"]
