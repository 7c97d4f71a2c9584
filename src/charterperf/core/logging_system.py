"""Logging setup for the feasibility engine and its command line adapter.

Library modules only ever call get_logger(); handlers are installed by the
host process through initialize_logging(), which loads an optional YAML
configuration, rotates the previous run's log and attaches console and
combined-file handlers.

Platform-specific log locations:
    - macOS: ~/Library/Logs/CharterPerf/charterperf.log
    - Linux: ~/.charterperf/logs/charterperf.log
    - Windows: %AppData%/CharterPerf/Logs/charterperf.log

Typical usage example:
    from charterperf.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.warning("Airport %s not found, using %s", code, default_code)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory.

    Examples:
        >>> get_platform_log_dir()
        PosixPath('/home/user/.charterperf/logs')
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "CharterPerf"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "CharterPerf" / "Logs"
    else:
        return Path.home() / ".charterperf" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "charterperf.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    charterperf.log becomes charterperf.log.1, older files shift by one and
    anything beyond keep_count is deleted.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename
    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = True) -> None:
    """Install handlers on the root logger.

    Called once by the host process (the CLI does it in main()). Importing
    the engine never touches the root logger.

    Args:
        config_path: Path to a logging YAML file. If None, defaults are used.
        use_platform_dir: If True, write the combined log to the platform
            log directory instead of the configured log_dir.

    Raises:
        LoggingError: If the configuration file cannot be read.
    """
    global _logging_config, _initialized

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
        _logging_config = _merge(_get_default_config(), loaded)
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    combined = _logging_config.get("combined_log", {})
    if combined.get("enabled", False):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(
            log_dir,
            combined.get("filename", "charterperf.log"),
            combined.get("backup_count", 5),
        )

    _configure_root_logger()

    # Re-apply per-component levels to loggers handed out before initialization
    for name, logger in _loggers_cache.items():
        _apply_component_config(name, logger)

    _initialized = True


def is_initialized() -> bool:
    """Return True once initialize_logging() has run."""
    return _initialized


def _get_default_config() -> dict[str, Any]:
    return {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": True,
            "filename": "charterperf.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _configure_root_logger() -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(_level(_logging_config.get("level", "INFO")))
    root_logger.handlers.clear()

    console = _logging_config.get("console", {})
    if console.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    combined = _logging_config.get("combined_log", {})
    if combined.get("enabled", False):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / combined.get("filename", "charterperf.log")
        # Rotation already happened at startup, so the file is always fresh
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise LoggingError(f"Unknown log level: {name}")
    return level


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def _apply_component_config(name: str, logger: logging.Logger) -> None:
    component_config = _logging_config.get("components", {}).get(name, {})
    if not component_config.get("enabled", True):
        logger.disabled = True
        return
    logger.disabled = False
    if "level" in component_config:
        logger.setLevel(_level(component_config["level"]))


def get_logger(name: str) -> logging.Logger:
    """Get a logger for an engine component.

    Loggers are cached. A component can be silenced or given its own level
    under the 'components' section of the logging YAML.

    Args:
        name: Logger name, usually the module's __name__.

    Returns:
        Logger instance.

    Note:
        Use lazy % formatting rather than f-strings.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _apply_component_config(name, logger)
    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers and forget configured state."""
    global _initialized, _logging_config

    logging.shutdown()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    _loggers_cache.clear()
    _logging_config = {}
    _initialized = False
