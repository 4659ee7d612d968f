"""Buffer telemetry on top of telelog.

One logger per name, configured from ``BYTEBUF_*`` environment variables.
Mutating buffer operations wrap themselves in ``span`` so every change is
profiled and tagged with the buffer, the operation and the content length;
``record_event`` carries the allocation and rebuild events.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BYTEBUF_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "bytebuf")
SPAN_COMPONENT = "buffer"

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    pairs = []
    for key, value in data.items():
        if isinstance(value, (bytes, bytearray)):
            value = repr(bytes(value))
        pairs.append((str(key), value if isinstance(value, str) else str(value)))
    return pairs


def _config_from_env() -> Any:
    config = tl.Config()
    config.with_min_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper())

    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))
    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")
    if log_file:
        config.with_file_output(log_file)

    config.with_profiling(_env_flag("PROFILE", True))
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (a ``telelog.Config``) or rebuild one from the environment.

    Cached loggers are dropped so the next ``get_logger`` picks the change up.
    """

    global _CONFIG
    _CONFIG = config if config is not None else _config_from_env()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _CONFIG is None:
            _CONFIG = _config_from_env()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _CONFIG)
    return _LOGGERS[logger_name]


def _log(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", payload)


@contextmanager
def span(
    operation: str,
    *,
    buffer: str,
    length: int,
    logger_name: Optional[str] = None,
) -> Iterator[None]:
    """Profile one buffer operation as ``buffer::<operation>``.

    The buffer name, operation and starting content length are pushed as
    logger context for the duration of the block. An exception escaping the
    block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    name = f"{SPAN_COMPONENT}::{operation}"
    context = {"buffer": buffer, "operation": operation, "length": str(length)}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        stack.enter_context(log.track_component(SPAN_COMPONENT))
        stack.enter_context(log.profile(name))
        try:
            yield
        except Exception as exc:
            failure = {"span": name, **context, "reason": str(exc)}
            _log(log, "error", "span::fail", failure)
            raise
        finally:
            for key in context:
                log.remove_context(key)


configure()

__all__ = ["configure", "get_logger", "record_event", "span"]
