# 📄 File: plant_tracker/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up the app's diary of what happens behind the scenes, so every plant added,
# task completed or AI call made leaves a tidy, searchable record.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), request/user context
# carried through contextvars, external API call timing and business event helpers.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: main.py (setup + request context middleware), GardenStore and GardenService
# (business events), APIClient (external call timing), repositories

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

from plant_tracker.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}

SERVICE_NAME = 'plant-tracker-api'


def _hostname() -> str:
    return os.uname().nodename if hasattr(os, 'uname') else 'unknown'


class ContextualFormatter(logging.Formatter):
    """
    Plain text formatter that stamps request and user ids on every record.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = _hostname()

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent structure for
    log aggregation and analysis tools.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('json_ensure_ascii', False)
        super().__init__(*args, **kwargs)
        self.hostname = _hostname()

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname

        if request_id_var.get():
            log_record['request_id'] = request_id_var.get()
        if user_id_var.get():
            log_record['user_id'] = user_id_var.get()

        # StructuredLogger nests its fields under extra_fields
        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record['extra'] = extra_fields


class PerformanceLogger:
    """
    Logger for tracking performance metrics and timing information.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        extra: Dict = None
    ):
        """Log HTTP request performance."""
        extra_fields = {
            'event_type': 'http_request',
            'method': method,
            'path': path,
            'status_code': status_code,
            'duration_ms': duration_ms,
            **(extra or {})
        }

        self.logger.info(
            f"HTTP {method} {path} - {status_code} - {duration_ms:.2f}ms",
            extra={'extra_fields': extra_fields}
        )

    def log_external_api_call(
        self,
        api_name: str,
        endpoint: str,
        method: str,
        status_code: int,
        duration_ms: float,
        success: bool,
        extra: Dict = None
    ):
        """Log external API call performance."""
        extra_fields = {
            'event_type': 'external_api_call',
            'api_name': api_name,
            'endpoint': endpoint,
            'method': method,
            'status_code': status_code,
            'duration_ms': duration_ms,
            'success': success,
            **(extra or {})
        }

        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"API {api_name} {method} {endpoint} - {status_code} - {duration_ms:.2f}ms",
            extra={'extra_fields': extra_fields}
        )


class StructuredLogger:
    """
    Enhanced logger with structured logging capabilities.

    Provides methods for logging different types of events with
    consistent structure and contextual information.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.performance = PerformanceLogger(self.logger)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in ['exc_info', 'stack_info', 'stacklevel']:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items()
                        if k in ['exc_info', 'stack_info', 'stacklevel']}

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)

    def log_user_action(
        self,
        action: str,
        user_id: str,
        resource: str = None,
        result: str = 'success',
        extra: Dict = None
    ):
        """Log user action for audit trail."""
        extra_fields = {
            'event_type': 'user_action',
            'action': action,
            'user_id': user_id,
            'result': result,
            **(extra or {})
        }

        if resource:
            extra_fields['resource'] = resource

        self.info(
            f"User {user_id} performed {action}" +
            (f" on {resource}" if resource else ""),
            extra=extra_fields
        )

    def log_business_event(
        self,
        event_type: str,
        description: str,
        entity_id: str = None,
        entity_type: str = None,
        extra: Dict = None
    ):
        """Log business events for analytics."""
        extra_fields = {
            'event_type': 'business_event',
            'business_event_type': event_type,
            'description': description,
            **(extra or {})
        }

        if entity_id:
            extra_fields['entity_id'] = entity_id
        if entity_type:
            extra_fields['entity_type'] = entity_type

        self.info(description, extra=extra_fields)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Values not passed in are read from the application settings.
    Calling it again after a successful setup is a no-op.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter('%(message)s')
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger

    return logger


@contextmanager
def log_context(request_id: str = None, user_id: str = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier (generated when omitted)
        user_id: Opaque user key of the caller
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
