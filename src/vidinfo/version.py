"""Version management for vidinfo."""

from importlib import metadata
from pathlib import Path

try:
    import tomllib
except ImportError:
    # Python < 3.11 fallback
    try:
        import tomli as tomllib  # type: ignore
    except ImportError:
        tomllib = None


def get_version() -> str:
    """Get the current version, from pyproject.toml in a checkout or the installed metadata."""
    project_root = Path(__file__).parent.parent.parent
    pyproject_path = project_root / "pyproject.toml"

    if tomllib is not None and pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
                return data["project"]["version"]
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            pass

    try:
        return metadata.version("vidinfo")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
