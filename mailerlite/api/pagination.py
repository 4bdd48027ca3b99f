# mailerlite/api/pagination.py

from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
import yarl

from .errors import PageTokenError

PAGE_TOKEN_PARAM = "page_token"
PAGE_PARAM = "page"

def _parse_request_uri(url_text: str) -> yarl.URL:
    """Parse an absolute URL or absolute path"""
    try:
        url = yarl.URL(url_text)
    except (ValueError, TypeError) as e:
        raise PageTokenError(f"Failed to parse page link {url_text!r}: {str(e)}")
    if not url.is_absolute() and not url.path.startswith("/"):
        raise PageTokenError(f"Page link is not a request URI: {url_text!r}")
    return url

def page_token_from_url(url_text: str) -> str:
    return _parse_request_uri(url_text).query.get(PAGE_TOKEN_PARAM, "")

def page_from_url(url_text: str) -> int:
    """Page number carried by a link's ``page`` parameter"""
    page = _parse_request_uri(url_text).query.get(PAGE_PARAM, "")
    try:
        return int(page)
    except ValueError:
        raise PageTokenError(f"Invalid page number {page!r} in {url_text!r}")

def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(value)

@dataclass
class Links:
    """Navigation links returned along with a list"""
    first: str = ""
    last: str = ""
    prev: str = ""
    next: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Links":
        data = data or {}
        return cls(
            first=data.get("first") or "",
            last=data.get("last") or "",
            prev=data.get("prev") or "",
            next=data.get("next") or ""
        )

    def next_page_token(self) -> str:
        """Page token to request the next page, empty on the last page"""
        return next_page_token(self)

    def prev_page_token(self) -> str:
        """Page token to request the previous page, empty on the first page"""
        return prev_page_token(self)

    def is_last_page(self) -> bool:
        return self.next == ""

    def next_page(self) -> Optional[int]:
        """Page number of the next page, None on the last page"""
        if self.is_last_page():
            return None
        return page_from_url(self.next)

def next_page_token(links: Optional[Links]) -> str:
    if links is None or not links.next:
        return ""
    return page_token_from_url(links.next)

def prev_page_token(links: Optional[Links]) -> str:
    if links is None or not links.prev:
        return ""
    return page_token_from_url(links.prev)

@dataclass
class MetaLink:
    """Labeled page link used for rendering pagers"""
    url: Optional[str] = None
    label: str = ""
    active: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetaLink":
        return cls(
            url=data.get("url"),
            label=data.get("label") or "",
            active=bool(data.get("active", False))
        )

@dataclass
class Meta:
    current_page: int = 0
    from_: int = 0
    last_page: int = 0
    links: List[MetaLink] = field(default_factory=list)
    path: str = ""
    per_page: int = 0
    to: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Meta":
        data = data or {}
        return cls(
            current_page=_int(data.get("current_page")),
            from_=_int(data.get("from")),
            last_page=_int(data.get("last_page")),
            links=[MetaLink.from_dict(link) for link in data.get("links") or []],
            path=data.get("path") or "",
            per_page=_int(data.get("per_page")),
            to=_int(data.get("to")),
            total=_int(data.get("total"))
        )

@dataclass
class Page:
    """List response envelope: items plus navigation"""
    data: List[Any] = field(default_factory=list)
    links: Links = field(default_factory=Links)
    meta: Meta = field(default_factory=Meta)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Page":
        return cls(
            data=list(payload.get("data") or []),
            links=Links.from_dict(payload.get("links")),
            meta=Meta.from_dict(payload.get("meta"))
        )

    def is_last_page(self) -> bool:
        return self.links.is_last_page()
