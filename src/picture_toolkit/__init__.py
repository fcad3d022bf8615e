"""Top-level package for the picture toolkit.

Provides subpackages:
- picture_toolkit.core – data models, errors, schema validation
- picture_toolkit.definitions – definition resolving and registries
- picture_toolkit.creator – variant generation with Pillow
- picture_toolkit.markup – <picture> markup rendering
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("picture-toolkit")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from picture_toolkit.core.models import CreatedPicture, Img, Picture, Source, Sources, Srcset, Variant
from picture_toolkit.creator import CreatorConfig, PictureCreator
from picture_toolkit.definitions import (
    ArrayDefinition,
    Definitions,
    JsonFilesDefinitions,
    PictureDefinition,
    StackDefinitions,
    resolve_array,
    resolve_factory,
)
from picture_toolkit.markup import PictureTagFactory

__all__: list[str] = [
    "__version__",
    "CreatedPicture",
    "Img",
    "Picture",
    "Source",
    "Sources",
    "Srcset",
    "Variant",
    "CreatorConfig",
    "PictureCreator",
    "ArrayDefinition",
    "Definitions",
    "JsonFilesDefinitions",
    "PictureDefinition",
    "StackDefinitions",
    "resolve_array",
    "resolve_factory",
    "PictureTagFactory",
]
