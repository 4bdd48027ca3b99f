"""
Async client for the MailerLite REST API.
"""

from .api import (
    Client,
    RequestContext,
    APIError,
    ErrorKind,
    ErrorResponse,
    AuthenticationError,
    Filter,
    ListOptions,
    SortBy,
    Links,
    Page
)
from .core import Config, Logger, MailerLiteError

__version__ = "0.1.0"

__all__ = [
    'Client',
    'RequestContext',
    'APIError',
    'ErrorKind',
    'ErrorResponse',
    'AuthenticationError',
    'Filter',
    'ListOptions',
    'SortBy',
    'Links',
    'Page',
    'Config',
    'Logger',
    'MailerLiteError'
]
