"""
Aces logging.

Two channels share this module:

* Leveled text messages. `get_logger(module)` returns a logger that writes
  `[module] LEVEL: message` lines to stderr when the message's level is at
  or above the module's threshold.
* Structured records. `emit_record(module, record)` hands a JSON-ready dict
  to the sink registered for that module. `FileSink` appends JSON Lines to
  a per-session file; `NullSink` drops everything.

Usage:
    from aces.logging import get_logger, emit_record

    log = get_logger('dogfight.waves')
    log.info("Wave %d cleared", wave)

    emit_record('session', {'type': 'game_over', 'ally_score': 120})

Environment:
    ACES_LOG_LEVEL=DEBUG                 default threshold
    ACES_LOG_DOGFIGHT_AI=TRACE           threshold for 'dogfight.ai'
    ACES_LOG_DIR=/tmp/aces-logs          where FileSink writes
    ACES_LOGGING_SESSION_ENABLED=true    give 'session' a FileSink
    ACES_LOGGING_SESSION_DIR=/tmp/runs   ... in this directory
    ACES_DATA_DIR=~/aces                 per-user data (high scores, logs)
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


class LogLevel(IntEnum):
    """Message thresholds. Values line up with the stdlib logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARN': LogLevel.WARNING,
    'WARNING': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},     # normalized module key -> LogLevel
    'log_dir': None,         # FileSink directory override
    'modules': {},           # per-module record settings, e.g. {'session': {'enabled': True}}
}


def _module_key(module: str) -> str:
    """Normalize a module name to its env-var form (dogfight.ai -> dogfight_ai)."""
    return module.lower().replace('.', '_').replace('/', '_')


def _parse_level(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.strip().upper(), LogLevel.INFO)


def _parse_setting(value: str) -> Any:
    """Turn an env string into a bool, int, float or str."""
    lowered = value.lower()
    if lowered in ('true', 'yes', 'on', '1'):
        return True
    if lowered in ('false', 'no', 'off', '0'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    return value


# =============================================================================
# Directories
# =============================================================================

def get_data_dir() -> Path:
    """Per-user data directory.

    ACES_DATA_DIR wins; otherwise the platform convention is used
    (~/Library/Application Support/Aces, %APPDATA%/Aces, or
    $XDG_DATA_HOME/aces).
    """
    override = os.environ.get('ACES_DATA_DIR')
    if override:
        return Path(override).expanduser()

    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'Aces'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'Aces'
    return Path(os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))) / 'aces'


def get_log_dir() -> str:
    """Directory for FileSink output: configured dir, ACES_LOG_DIR, or <data dir>/logs."""
    configured = _config.get('log_dir') or os.environ.get('ACES_LOG_DIR')
    if configured:
        return str(Path(configured).expanduser())
    return str(get_data_dir() / 'logs')


def get_module_config(module: str) -> Dict[str, Any]:
    """Record settings for a module (from ACES_LOGGING_<MODULE>_<SETTING>)."""
    return _config['modules'].get(_module_key(module), {})


# =============================================================================
# Structured records
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Accept one JSON-serializable record from `module`."""

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """Appends records as JSON Lines, one file per module.

    Files are named `<session>_<module>.jsonl` and are bracketed by a
    header and a footer record so an interrupted session is recognizable.

    Args:
        log_dir: Output directory (default: get_log_dir(), created lazily)
        session_name: File name prefix (default: start timestamp)

    Examples:
        >>> with FileSink(log_dir='/tmp/aces', session_name='demo') as sink:
        ...     sink.emit('session', {'type': 'game_over', 'ally_score': 40})
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _directory(self) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path(self, module: str) -> Path:
        return self._directory() / f"{self._session_name}_{module}.jsonl"

    def _write(self, module: str, record: Dict[str, Any]) -> None:
        handle = self._files.get(module)
        if handle is None:
            handle = open(self._path(module), 'a')
            self._files[module] = handle
            handle.write(json.dumps({
                'type': 'header',
                'module': module,
                'session_name': self._session_name,
                'start_time': time.time(),
            }) + "\n")
        handle.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(module, {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        """Write footers and close every file."""
        for module, handle in self._files.items():
            handle.write(json.dumps({'type': 'footer', 'module': module, 'end_time': time.time()}) + "\n")
            handle.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by module."""
        return {module: self._path(module) for module in self._files}


class NullSink(LogSink):
    """Discards records. Used when a module's records are disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route `module`'s records to `sink`, replacing any earlier one."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink.

    Returns:
        False if no sink is registered for the module
    """
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if ACES_LOGGING_<MODULE>_ENABLED is set, else NullSink."""
    settings = get_module_config(module)
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

def configure_logging(level: str = 'INFO', modules: Optional[Dict[str, str]] = None) -> None:
    """Set the default threshold and, optionally, per-module thresholds.

    Examples:
        >>> configure_logging('WARNING', modules={'dogfight.ai': 'DEBUG'})
    """
    _config['default_level'] = _parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][_module_key(module)] = _parse_level(module_level)


def _load_env_config() -> None:
    env = os.environ
    if 'ACES_LOG_LEVEL' in env:
        _config['default_level'] = _parse_level(env['ACES_LOG_LEVEL'])
    if 'ACES_LOG_DIR' in env:
        _config['log_dir'] = env['ACES_LOG_DIR']

    for key, value in env.items():
        if key.startswith('ACES_LOGGING_'):
            module, _, setting = key[len('ACES_LOGGING_'):].lower().partition('_')
            if module and setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_setting(value)
        elif key.startswith('ACES_LOG_') and key not in ('ACES_LOG_LEVEL', 'ACES_LOG_DIR'):
            _config['module_levels'][key[len('ACES_LOG_'):].lower()] = _parse_level(value)


_load_env_config()


# =============================================================================
# Loggers
# =============================================================================

class AcesLogger:
    """Leveled logger for one module.

    Messages use %-style arguments, formatted only if the message passes
    the module's threshold.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)
        tb = traceback.format_exc().strip()
        if tb and tb != 'NoneType: None':
            for line in tb.splitlines():
                self._log(LogLevel.ERROR, 'ERROR', line)


@lru_cache(maxsize=128)
def get_logger(module: str) -> AcesLogger:
    """Shared logger for `module` (dotted names allowed)."""
    return AcesLogger(module)
