"""Human friendly, colored rendering of JSON log lines."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime
from typing import Any, TextIO

__all__ = ["PrettyHandler", "pretty_log", "format_string"]

COLOR_RESET = "\033[0m"
COLOR_GREEN = "\033[32m"
COLOR_GRAY = "\033[37m"
COLOR_BRIGHT_RED = "\033[31;1m"
COLOR_BRIGHT_GRAY = "\033[37;1m"
COLOR_BRIGHT_WHITE = "\033[97;1m"

_LEVEL_COLORS = {"INFO": COLOR_BRIGHT_WHITE, "ERROR": COLOR_BRIGHT_RED}
_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def format_string(data: Any, indent: str) -> str:
    """Return ``data`` if it is a string, else "".

    Multi-line strings are placed on their own lines, each prefixed by ``indent``.
    """
    if not isinstance(data, str):
        return ""
    if "\n" in data:
        return "\n" + indent + data.replace("\n", "\n" + indent) + "\n"
    return data


def _pretty_line(line: str, out: TextIO) -> None:
    try:
        entry = json.loads(line)
    except ValueError:
        entry = None
    if not isinstance(entry, dict):
        out.write(line + "\n")
        return

    level = format_string(entry.pop("level", None), "").upper()
    level_color = _LEVEL_COLORS.get(level, COLOR_BRIGHT_GRAY)
    when = format_string(entry.pop("time", None), "\t")
    message = format_string(entry.pop("msg", None), "\t")
    out.write(
        " ".join(
            (
                COLOR_GREEN + when + COLOR_RESET,
                level_color + "[" + level + "]" + COLOR_RESET,
                message,
            )
        )
        + "\n"
    )
    for key in sorted(entry):
        value = entry[key]
        if isinstance(value, str):
            text = format_string(value, "\t\t")
        else:
            text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        out.write(f"\t{COLOR_GRAY}{key}:{COLOR_RESET} {text}\n")


def pretty_log(lines: Iterable[str], out: TextIO) -> None:
    """Write each JSON log line in ``lines`` to ``out`` in a readable form.

    Lines that are not JSON objects are written unchanged.
    """
    for line in lines:
        _pretty_line(line.rstrip("\r\n"), out)


class PrettyHandler(logging.Handler):
    """A logging handler writing records as colored, readable text."""

    def __init__(self, stream: TextIO | None = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "time": datetime.fromtimestamp(record.created)
                .astimezone()
                .isoformat(timespec="milliseconds"),
                "level": _LEVEL_NAMES.get(record.levelname, record.levelname),
                "msg": record.getMessage(),
            }
            for key, value in vars(record).items():
                if key not in _RESERVED:
                    entry[key] = value
            if record.exc_info:
                entry["exception"] = logging.Formatter().formatException(record.exc_info)
            line = json.dumps(entry, default=str, ensure_ascii=False)
            pretty_log([line], self.stream)
            self.stream.flush()
        except Exception:
            self.handleError(record)