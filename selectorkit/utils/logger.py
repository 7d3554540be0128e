# selectorkit/utils/logger.py
from __future__ import annotations

"""Logging
---------
Everything selectorkit logs goes through the "selectorkit" logger namespace:
a Rich console handler on stderr (rendered queries are highlighted) and, when
LOG_TO_FILE is set, a rotating JSON-lines file. Query context such as the
selector name and locator rides along on every record.
"""

import json
import logging
import threading
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, MutableMapping, Optional, Tuple

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.theme import Theme

from selectorkit.utils.config import LogLevel, Settings, get_settings


__all__ = [
    "ROOT_LOGGER",
    "QueryHighlighter",
    "JsonLineFormatter",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "bind",
    "unbind",
    "log_with_context",
]

ROOT_LOGGER = "selectorkit"

_lock = threading.Lock()
_configured = False
_bound: ContextVar[Dict[str, Any]] = ContextVar("selectorkit_log_context", default={})


# ------------- Console -------------

class QueryHighlighter(RegexHighlighter):
    """Colours the moving parts of XPath/CSS queries in log lines."""

    base_style = "query."
    highlights = [
        r"(?P<axis>\.?//|::)",
        r"(?P<attr>@[\w:-]+)",
        r"(?P<func>\b(?:normalize-space|string|contains|starts-with|concat|not)(?=\())",
        r"(?P<string>'[^']*'|\"[^\"]*\")",
        r"(?P<selector>selector=\w+)",
    ]


QUERY_THEME = Theme(
    {
        "query.axis": "dim",
        "query.attr": "cyan",
        "query.func": "magenta",
        "query.string": "green",
        "query.selector": "bold yellow",
    }
)


# ------------- File -------------

class JsonLineFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg, plus bound context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            entry["context"] = context
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


# ------------- Context -------------

class _ContextAdapter(logging.LoggerAdapter):
    """Merges bound context and the adapter's own context into `record.context`."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        context = {**_bound.get(), **(self.extra or {})}
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**context, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def bind(**kwargs: Any) -> None:
    """Attach context (e.g. command="find") to every later record in this context."""
    _bound.set({**_bound.get(), **kwargs})


def unbind(*keys: str) -> None:
    current = dict(_bound.get())
    for k in keys:
        current.pop(k, None)
    _bound.set(current)


def log_with_context(logger: logging.LoggerAdapter, **kwargs: Any) -> logging.LoggerAdapter:
    """
    Scoped logger carrying extra context:
        log = log_with_context(get_logger(__name__), selector="field")
        log.debug("resolving")
    """
    own = dict(logger.extra or {}) if isinstance(logger, _ContextAdapter) else {}
    own.update(kwargs)
    return _ContextAdapter(logger.logger, own)


# ------------- Setup -------------

def _level_of(level: LogLevel | str) -> int:
    name = level.value if isinstance(level, LogLevel) else str(level)
    return logging.getLevelName(name.upper()) if name.upper() in LogLevel.__members__ else logging.INFO


def configure_logging(settings: Optional[Settings] = None, *, force: bool = False) -> logging.Logger:
    """
    Install handlers on the "selectorkit" logger (once, unless `force`).
    Other loggers, including the root logger, are left alone.
    """
    global _configured
    base = logging.getLogger(ROOT_LOGGER)
    with _lock:
        if _configured and not force:
            return base

        settings = settings or get_settings()
        level = _level_of(settings.LOG_LEVEL)
        base.setLevel(level)
        for h in list(base.handlers):
            base.removeHandler(h)
            h.close()

        console = Console(
            stderr=True,
            theme=QUERY_THEME,
            color_system="auto" if settings.COLORIZED_OUTPUT else None,
        )
        console_handler = RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            highlighter=QueryHighlighter(),
        )
        console_handler.setLevel(level)
        base.addHandler(console_handler)

        if settings.LOG_TO_FILE:
            settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                settings.LOG_FILE,
                maxBytes=2 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonLineFormatter())
            base.addHandler(file_handler)

        _configured = True
    return base


def get_logger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """Logger under the selectorkit namespace, carrying bound context."""
    configure_logging()
    if not name:
        name = ROOT_LOGGER
    elif name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return _ContextAdapter(logging.getLogger(name), {})


def set_log_level(level: LogLevel | str) -> None:
    base = configure_logging()
    lvl = _level_of(level)
    base.setLevel(lvl)
    for h in base.handlers:
        h.setLevel(lvl)
