"""slash-activity: append-only activity log for shortcut events."""

import tomllib
from pathlib import Path

try:
    # Prefer pyproject.toml so development checkouts report the working version
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    __version__ = data["project"]["version"]
except (OSError, KeyError, tomllib.TOMLDecodeError):
    # Installed in non-editable mode: fall back to package metadata
    from importlib.metadata import PackageNotFoundError, version

    try:
        __version__ = version("slash-activity")
    except PackageNotFoundError:
        __version__ = "0.0.0-dev"
