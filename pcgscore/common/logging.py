"""Structured JSON logging module for pcgscore.

Every scoring run owns one JSON Lines log file. The file is named after the
moment the run started, so the run's `RunContext` is created once at
startup and handed to every component that logs.
"""

import json
import uuid
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from filelock import FileLock

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


def generate_id() -> str:
    """Generate a run ID."""
    return str(uuid.uuid4())


def _json_default(value: Any) -> str:
    """Log scores as fixed-point strings so no digit is lost."""
    if isinstance(value, Decimal):
        return format(value, "f")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def set_run_id(run_id: str | None) -> Token:
    """Set the run ID for the current context.

    Args:
        run_id: Run ID string or None to clear

    Returns:
        Token that restores the previous value via `_run_id.reset`

    Example:
        >>> _ = set_run_id("abc123")
        >>> get_run_id()
        'abc123'
    """
    return _run_id.set(run_id)


def get_run_id() -> str | None:
    """Get the current run ID from context.

    Returns:
        Run ID string or None if not set
    """
    return _run_id.get()


class JSONLogger:
    """Logger that writes JSON Lines to a file with consistent metadata."""

    def __init__(self, name: str, log_path: str | Path = "logs/pcgscore.jsonl"):
        self.name = name
        self._log_path = Path(log_path)
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock_path = self._log_path.with_suffix(self._log_path.suffix + ".lock")

    @property
    def log_path(self) -> Path:
        """Get the log file path."""
        return self._log_path

    def _log(self, level: str, message: str, metadata: dict[str, Any] | None = None) -> None:
        """Write a log entry as a JSON line.

        Args:
            level: Log level ("info", "warning" or "error")
            message: Log message
            metadata: Optional metadata dict to include in log entry
        """
        entry: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": level,
            "logger": self.name,
            "message": message,
        }

        run_id = get_run_id()
        if run_id:
            entry["run_id"] = run_id

        if metadata:
            entry["metadata"] = metadata

        json_line = json.dumps(entry, ensure_ascii=False, default=_json_default)

        with FileLock(self._lock_path):
            with self._log_path.open("a", encoding="utf-8") as f:
                f.write(json_line + "\n")

    def info(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        self._log("info", message, metadata)

    def error(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        self._log("error", message, metadata)

    def warning(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        self._log("warning", message, metadata)


class RunContext:
    """Lifecycle object for a single scoring run.

    Holds the run ID and start time and owns the run's log file. Loggers
    obtained from the same context all append to that file.

    Args:
        log_dir: Directory that receives the run log
        run_id: Optional explicit run ID (generated when omitted)
        started_at: Optional explicit start time (now, UTC, when omitted)

    Example:
        >>> with RunContext(Path("/tmp/logs")) as run:
        ...     run.get_logger("scoring.weights").info("weights computed")
    """

    def __init__(
        self,
        log_dir: str | Path,
        run_id: str | None = None,
        started_at: datetime | None = None,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.run_id = run_id or generate_id()
        self.started_at = started_at or datetime.now(tz=UTC)
        self._loggers: dict[str, JSONLogger] = {}
        self._token: Token | None = None

    @property
    def log_path(self) -> Path:
        stamp = self.started_at.strftime("%Y-%m-%dT%H_%M_%S_%fZ")
        return self.log_dir / f"result_log_{stamp}.jsonl"

    def get_logger(self, name: str) -> JSONLogger:
        """Get or create a logger bound to this run's log file.

        Args:
            name: Logger name (typically module name, e.g., "scoring.readers")

        Returns:
            JSONLogger instance
        """
        if name not in self._loggers:
            self._loggers[name] = JSONLogger(name, self.log_path)
        return self._loggers[name]

    def __enter__(self) -> "RunContext":
        self._token = set_run_id(self.run_id)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._token is not None:
            _run_id.reset(self._token)
            self._token = None
