# cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return any(
                marker in content
                for marker in ("docker", "kubepods", "containerd", "podman")
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = "cmdtree.log",
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure logging for a cmdtree application with either human-readable or
    structured JSON console output.

    Args:
        mode (str | None):
            Console output mode:
                - "cli": Rich console logs (default outside containers)
                - "json": JSON logs (default inside containers)
            Falls back to the `CMDTREE_LOG_MODE` environment variable, then to
            container detection.
        log_filename (str | None):
            File receiving every record at `file_log_level`. No file handler is
            installed when None.
        json_log_to_file (bool):
            Format the file log as JSON instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Existing root handlers are removed first.

    Raises:
        ValueError: If `mode` is neither "cli" nor "json".
    """
    if not mode:
        mode = os.getenv("CMDTREE_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logger = logging.getLogger("cmdtree")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
