"""
Loguru sinks for the client.

- stderr always, DEBUG or INFO depending on settings
- hourly file under LOG_DIR when DEBUG is on or under pytest (TEST_LOG_DIR)
- stdlib logging (httpx, asyncio) routed into loguru, httpx request lines leveled by status
"""

from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from eventora.platform.config.core_setting import settings
from eventora.platform.constant.path import LOG_DIR
from eventora.platform.logging.service_context import get_service_context


TEST_LOG_DIR = os.environ.get('TEST_LOG_DIR')

# Keys whose values never reach a log line (request bodies, form fields, entity reprs)
SENSITIVE_KEYWORDS = {
    'password',
    'newPassword',
    'new_password',
    'token',
    'tokenId',
    'token_id',
    'otp',
    'cardNumber',
    'card_number',
    'cvv',
    'expiryDate',
    'expiry_date',
    'Authorization',
}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    )


def level_for_http_status(message: str) -> str | None:
    """
    Log level for an httpx request line, None for any other message.

    'HTTP Request: POST http://localhost:5000/api/bookings "HTTP/1.1 409 Conflict"' -> 'ERROR'
    """
    if not message.startswith('HTTP Request:') or '"HTTP/' not in message:
        return None
    try:
        status_code = int(message.rsplit('"HTTP/', 1)[1].split()[1])
    except (ValueError, IndexError):
        return None

    for floor, level in ((500, 'CRITICAL'), (400, 'ERROR'), (300, 'WARNING'), (200, 'SUCCESS')):
        if status_code >= floor:
            return level
    return 'INFO'


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the original caller frame."""

    _bound: 'LoguruLogger | None' = None

    @classmethod
    def bound_logger(cls) -> 'LoguruLogger':
        if cls._bound is None:
            cls._bound = _bind_defaults()
        return cls._bound

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and (
            record.name.startswith('httpcore') or 'Using selector:' in message
        ):
            return

        level: str | int | None = level_for_http_status(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        self.bound_logger().opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path() -> str:
    stamp = datetime.now().astimezone().strftime('%Y-%m-%d_%H')
    if TEST_LOG_DIR:
        return f'{TEST_LOG_DIR}/test_{stamp}.log'
    return f'{LOG_DIR}/{stamp}.log'


def _configure() -> 'LoguruLogger':
    loguru_logger.remove()
    bound = _bind_defaults()
    level = 'DEBUG' if settings.DEBUG else 'INFO'

    bound.add(sys.stderr, format=io_log_format, level=level)
    if settings.DEBUG or TEST_LOG_DIR:
        bound.add(
            _log_file_path(),
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            level=level,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return bound


custom_logger = _configure()
