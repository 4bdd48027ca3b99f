# mailerlite/api/__init__.py

"""
Request/response pipeline for the MailerLite REST API.
"""

from .client import Client, RequestMethod
from .errors import (
    APIError,
    RequestError,
    OptionsEncodeError,
    TransportError,
    RequestCancelledError,
    DeadlineExceededError,
    ResponseError,
    PageTokenError,
    ErrorKind,
    ErrorResponse,
    AuthenticationError
)
from .options import Filter, ListOptions, QueryOptions, SortBy, add_options
from .pagination import Links, Meta, MetaLink, Page, next_page_token, prev_page_token
from .response_handler import Response, check_response, raw_json
from .transport import AiohttpTransport, PreparedRequest, RawResponse, RequestContext, Transport

__all__ = [
    'Client',
    'RequestMethod',
    'APIError',
    'RequestError',
    'OptionsEncodeError',
    'TransportError',
    'RequestCancelledError',
    'DeadlineExceededError',
    'ResponseError',
    'PageTokenError',
    'ErrorKind',
    'ErrorResponse',
    'AuthenticationError',
    'Filter',
    'ListOptions',
    'QueryOptions',
    'SortBy',
    'add_options',
    'Links',
    'Meta',
    'MetaLink',
    'Page',
    'next_page_token',
    'prev_page_token',
    'Response',
    'check_response',
    'raw_json',
    'AiohttpTransport',
    'PreparedRequest',
    'RawResponse',
    'RequestContext',
    'Transport'
]
