"""Exceptions raised by the validating (strict) entry points."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class AnswerKeyFormatError(ValueError):
    """Raised by a strict answer key load when lines cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.errors = errors or []
