"""Top-level package for the OMR grader.

Provides subpackages:
- omr_grader.core – immutable answer and result models
- omr_grader.grading – answer key, comparator and score calculator
- omr_grader.detection – bubble and handwriting decision policies
- omr_grader.extraction – turning per-region readings into answers
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
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
    except ImportError:
        return "0.0.0"
    try:
        return pkg_version("omr_grader")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
