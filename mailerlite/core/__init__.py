"""
Core configuration, logging and exception types.
"""

from .config import Config
from .exceptions import MailerLiteError, ConfigError, LoggerError
from .logger import Logger

__all__ = [
    'Config',
    'Logger',
    'MailerLiteError',
    'ConfigError',
    'LoggerError'
]
