"""Top-level package for the paginated Markdown to PDF engine.

Provides subpackages:
- mdpdf_toolkit.pagination – page splitting and per-page Markdown rendering
- mdpdf_toolkit.layout – print stylesheet, document assembly, preview scaling
- mdpdf_toolkit.output – rendering surface and raster PDF export
- mdpdf_toolkit.cli – command line entry point
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
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("mdpdf_toolkit")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
