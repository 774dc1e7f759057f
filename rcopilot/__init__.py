"""
Core package for the personal research copilot.

The package stays importable without catalogs or API keys; everything that
needs them receives them explicitly at construction time.
"""

from importlib import metadata


def get_version() -> str:
    """Return the installed project version."""
    try:
        return metadata.version("research-copilot")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
