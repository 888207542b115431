"""
Output sink for decoded rows.

Each value is written as soon as it arrives, one per line, either as its
``str`` form or as a JSON document.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Optional, TextIO

FORMATS = ("text", "json")


class RowWriter:
    def __init__(self, stream: Optional[TextIO] = None, fmt: str = "text") -> None:
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported output format: {fmt}")
        self._stream = stream
        self._fmt = fmt

    @property
    def stream(self) -> TextIO:
        # sys.stdout may be swapped after construction.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, value: Any) -> None:
        if self._fmt == "json":
            line = json.dumps(value, default=str, ensure_ascii=False)
        else:
            line = str(value)
        self.stream.write(line + "\n")
        self.stream.flush()
