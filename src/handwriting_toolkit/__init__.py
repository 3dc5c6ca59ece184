"""Top-level package for the Handwriting Toolkit.

Provides subpackages:
- handwriting_toolkit.core – models, random sources, serialization
- handwriting_toolkit.writer – tokenizer, paper, glyph layout, exam renderer
- handwriting_toolkit.planner – page planning for long answers
- handwriting_toolkit.extractor – style extraction from handwriting samples
- handwriting_toolkit.builder – page rendering pipeline
- handwriting_toolkit.storage – style profile persistence
- handwriting_toolkit.output – PDF export
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("handwriting_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 Handwriting Toolkit contributors"
__all__: list[str] = ["__version__"]
