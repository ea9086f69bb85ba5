"""Log output for the fivethreeone CLI.

Engine modules tag progression events with ``fto_*`` extras (``fto_lift``,
``fto_cycle``, ``fto_e1rm``). Both formats surface them without the prefix:

    text: 2026-01-05 18:00:00,000 INFO fivethreeone.progression: Squat cycle 1 complete; 1RM +10.0 [lift=squat cycle=1]
    json: {"timestamp": ..., "message": ..., "workout": {"lift": "squat", "cycle": 1}}

FIVETHREEONE_LOG_FORMAT picks the format, FIVETHREEONE_LOG_LEVEL the level.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
EXTRA_PREFIX = "fto_"


def workout_fields(record: logging.LogRecord) -> dict:
    """The record's ``fto_*`` extras keyed by their bare names."""
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(EXTRA_PREFIX)
    }


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = workout_fields(record)
        if not fields:
            return line
        tags = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{line} [{tags}]"


class JSONFormatter(logging.Formatter):
    """One JSON object per record; workout extras go under "workout"."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = workout_fields(record)
        if fields:
            entry["workout"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(entry, default=str)


def setup_logging(log_format: str, level: int | str = logging.WARNING) -> None:
    """Route all logging to stderr, replacing any handlers already installed."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    root.addHandler(handler)
