# src/prefnet/errors.py

"""
Error taxonomy for the preparation pipeline.

- SchemaError: a required column is absent from an input table (fatal).
- DataError: a required field holds an unparseable or out-of-range value.
- EmptyResultError: a filter or partition produced no edges. Soft: most
  consumers accept empty graphs, only callers that cannot work without
  edges raise it.
"""

from typing import Iterable, Optional, Sequence


class PrefnetError(Exception):
    """Base class for all pipeline errors."""


class SchemaError(PrefnetError):
    def __init__(self, missing: Iterable[str], available: Iterable[str] = ()):
        self.missing = sorted(missing)
        self.available = list(available)
        super().__init__(
            f"Missing required column(s) {self.missing}; "
            f"available columns: {self.available}"
        )


class DataError(PrefnetError):
    def __init__(self, message: str, rows: Optional[Sequence[int]] = None):
        self.rows = list(rows) if rows is not None else []
        if self.rows:
            preview = ", ".join(str(r) for r in self.rows[:10])
            if len(self.rows) > 10:
                preview += ", ..."
            message = f"{message} (rows: {preview})"
        super().__init__(message)


class EmptyResultError(PrefnetError):
    """Raised only where an empty graph cannot be handled downstream."""
