# mailerlite/api/options.py

from typing import Dict, Any, Optional, List, Mapping, Tuple, ClassVar
from dataclasses import dataclass
import yarl

from .errors import OptionsEncodeError

FILTER_KEY = "Filter"
FILTER_NAME_KEY = "Filter[Name]"
FILTER_VALUE_KEY = "Filter[Value]"

class SortBy:
    """Sort values accepted by list endpoints"""
    NAME = "name"
    NAME_DESCENDING = "-name"
    TOTAL = "total"
    TOTAL_DESCENDING = "-total"
    OPEN_RATE = "open_rate"
    OPEN_RATE_DESCENDING = "-open_rate"
    CLICK_RATE = "click_rate"
    CLICK_RATE_DESCENDING = "-click_rate"
    CREATED_AT = "created_at"
    CREATED_AT_DESCENDING = "-created_at"

@dataclass
class Filter:
    """Single name/value filter criterion"""
    name: str
    value: str

    def to_values(self, prefix: str = FILTER_KEY) -> Dict[str, List[str]]:
        return {
            f"{prefix}[Name]": [str(self.name)],
            f"{prefix}[Value]": [_encode_scalar(self.value)]
        }

class QueryOptions:
    """
    Base for read options.

    Subclasses declare ``QUERY_FIELDS`` as ``(attribute, query key)``
    pairs. Attributes that are None or empty are left out of the query.
    """

    QUERY_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def to_values(self) -> Dict[str, List[str]]:
        values: Dict[str, List[str]] = {}
        for attr, key in self.QUERY_FIELDS:
            _put(values, key, getattr(self, attr))
        return values

@dataclass
class ListOptions(QueryOptions):
    """Options for list endpoints: filtering, sorting and pagination"""
    filter: Optional[Filter] = None
    limit: Optional[int] = None
    page: Optional[int] = None
    page_token: Optional[str] = None
    sort: Optional[str] = None

    QUERY_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("filter", FILTER_KEY),
        ("limit", "limit"),
        ("page", "page"),
        ("page_token", "page_token"),
        ("sort", "sort"),
    )

def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise OptionsEncodeError(f"Unsupported query value type: {type(value).__name__}")

def _put(values: Dict[str, List[str]], key: str, value: Any) -> None:
    """Add ``value`` under ``key`` unless it is empty"""
    if value is None or value == "":
        return
    if isinstance(value, Filter):
        values.update(value.to_values(key))
    elif isinstance(value, (list, tuple, set, frozenset)):
        encoded = [_encode_scalar(item) for item in value if item is not None]
        if encoded:
            values[key] = encoded
    else:
        values[key] = [_encode_scalar(value)]

def query_values(options: Any) -> Dict[str, List[str]]:
    """Enumerate an options value into query keys and values"""
    if isinstance(options, QueryOptions):
        return options.to_values()
    if isinstance(options, Filter):
        return options.to_values()
    if isinstance(options, Mapping):
        values: Dict[str, List[str]] = {}
        for key, value in options.items():
            if isinstance(value, Filter):
                key = FILTER_KEY
            _put(values, str(key), value)
        return values
    raise OptionsEncodeError(f"Unsupported options type: {type(options).__name__}")

def add_options(url: str, options: Any) -> str:
    """
    Merge read options into the query string of ``url``

    Args:
        url: Base URL, possibly carrying a query already
        options: Options value, or None to leave the URL untouched

    Returns:
        URL with the merged query, keys in sorted order
    """
    if options is None:
        return url

    try:
        orig_url = yarl.URL(url)
    except (ValueError, TypeError) as e:
        raise OptionsEncodeError(f"Failed to parse URL {url!r}: {str(e)}")

    merged: Dict[str, List[str]] = {}
    for key in orig_url.query:
        merged[key] = list(orig_url.query.getall(key))

    filter_key = ""
    filter_value = ""

    for key, value in query_values(options).items():
        if key == FILTER_KEY:
            continue
        if key == FILTER_NAME_KEY:
            filter_key = f"filter[{value[0]}]"
            continue
        if key == FILTER_VALUE_KEY:
            filter_value = value[0]
            continue
        merged[key] = value

    if filter_key:
        merged.setdefault(filter_key, []).append(filter_value)

    pairs = [(key, value) for key in sorted(merged) for value in merged[key]]
    return str(orig_url.with_query(pairs))
