"""Error kinds raised by the parsing layer.

The pipeline catches every :class:`ReportError` and degrades to an empty
report; nothing here escapes rendering or aggregation.
"""

from __future__ import annotations

from pathlib import Path


class ReportError(Exception):
    """Base class for report input failures."""


class InputNotFound(ReportError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class MalformedInputError(ReportError):
    """JSON input that cannot be turned into findings."""


class MalformedJson(MalformedInputError):
    pass


class MalformedSchema(MalformedInputError):
    pass
