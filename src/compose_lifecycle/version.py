"""Version information for compose-lifecycle.

Version is defined in pyproject.toml and read at runtime via importlib.metadata.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get version string from package metadata."""
    try:
        return version("compose-lifecycle")
    except PackageNotFoundError:
        # Fallback for source checkouts that are not installed
        return "0.0.0+dev"


__version__ = get_version()
