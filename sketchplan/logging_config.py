"""Loguru setup for sketchplan.

The package disables its own loggers on import; applications opt in with
``setup_logging`` (or ``configure_logging`` from loaded settings). Records
emitted for one sketch carry its container id in ``extra["space_id"]``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from sketchplan.metrics.pipeline_metrics import RecognitionMetrics
    from sketchplan.settings import LoggingSettings

NO_SPACE = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[space_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class JSONFormatter:
    """One JSON object per record; bound values go under ``context``."""

    def __call__(self, record: dict[str, Any]) -> str:
        payload: dict[str, Any] = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "logger": record["name"],
            "location": f"{record['function']}:{record['line']}",
            "message": record["message"],
            "context": dict(record["extra"]),
        }
        exc = record["exception"]
        if exc is not None and exc.type is not None:
            payload["exception"] = {"type": exc.type.__name__, "value": str(exc.value)}

        # loguru treats the returned string as a format template
        line = json.dumps(payload, ensure_ascii=False, default=str)
        return line.replace("{", "{{").replace("}", "}}") + "\n"


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Install sketchplan's sinks, replacing any existing ones.

    Args:
        level: Minimum level for every sink.
        json_format: Emit JSON lines instead of the colorized console format.
        log_file: Optional rotating file sink (10 MB, kept 7 days, zipped).
    """
    logger.remove()
    logger.configure(extra={"space_id": NO_SPACE})
    logger.enable("sketchplan")

    formatter: Any = JSONFormatter() if json_format else CONSOLE_FORMAT
    logger.add(sys.stderr, format=formatter, level=level, colorize=not json_format)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=formatter,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


def configure_logging(settings: "LoggingSettings") -> None:
    """``setup_logging`` driven by the ``logging`` section of the settings file."""
    setup_logging(level=settings.level, json_format=settings.json_format, log_file=settings.file)


def space_logger(space_id: str) -> Any:
    return logger.bind(space_id=space_id)


def log_run_summary(space_id: str, metrics: "RecognitionMetrics") -> None:
    """One INFO record per recognized sketch, with the metrics summary bound."""
    summary = metrics.get_summary()
    space_logger(space_id).bind(metrics=summary).info(
        "Recognized {} strokes into {} shapes in {:.3f}s",
        summary["strokes"],
        summary["shapes"],
        summary["total_time_seconds"],
    )
