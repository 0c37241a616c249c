"""Logging utilities for the account selection core.

This module provides:
- Logging configuration from AccessTreeConfig
- Bounded previews for logged labels and search queries
- JSON or plain-text formatting with node/tree context
- A logger adapter that attaches node_id and tree to every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import AccessTreeConfig, LogLevel


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


_RESERVED_RECORD_KEYS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "node_id", "tree",
}


class AccessTreeFormatter(logging.Formatter):
    """Formatter that includes node context and optional JSON output."""

    def __init__(
        self,
        include_context: bool = True,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        """Initialize the formatter.

        Args:
            include_context: Whether to include node_id/tree in logs
            json_format: Whether to output JSON (True) or plain text (False)
        """
        super().__init__(*args, **kwargs)
        self.include_context = include_context
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        node_id = getattr(record, "node_id", None)
        tree = getattr(record, "tree", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            if node_id:
                log_data["node_id"] = node_id
            if tree:
                log_data["tree"] = str(tree)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if self.include_context and node_id:
            parts.append(f"node_id={node_id}")
        if self.include_context and tree:
            parts.append(f"tree={log_data['tree']}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class NodeLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds node_id and tree to log records.

    Usage:
        logger = get_tree_logger(__name__)
        logger.debug("toggled", node_id="hr-edit")
    """

    def __init__(
        self,
        logger: logging.Logger,
        node_id: Optional[str] = None,
        tree: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.node_id = node_id
        self.tree = tree

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        node_id = kwargs.pop("node_id", self.node_id)
        tree = kwargs.pop("tree", self.tree)

        extra = dict(kwargs.get("extra") or {})
        if node_id:
            extra["node_id"] = node_id
        if tree:
            extra["tree"] = tree
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AccessTreeConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure root logging for a process embedding the core.

    Args:
        config: AccessTreeConfig instance (if None, loads from environment)
        json_format: Override for ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    use_json = config.log_json if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(AccessTreeFormatter(include_context=True, json_format=use_json))
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_tree_logger(
    name: str,
    node_id: Optional[str] = None,
    tree: Optional[str] = None,
) -> NodeLoggerAdapter:
    """Get a logger adapter carrying node/tree context.

    Example:
        logger = get_tree_logger(__name__, tree="unix")
        logger.info("search applied", node_id="linux-admin")
    """
    logger = logging.getLogger(name)
    return NodeLoggerAdapter(logger, node_id=node_id, tree=tree)


__all__ = [
    "safe_preview",
    "AccessTreeFormatter",
    "NodeLoggerAdapter",
    "setup_logging",
    "get_tree_logger",
]
