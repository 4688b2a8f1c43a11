"""Turn a logical API call into a wire request, independent of authentication.

GET parameters go to the query string. POST and PUT parameters become a
compact JSON body, or a multipart form when any of them carries binary data.
"""

import enum
import io
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from tumblr_client.errors.exceptions import InvalidParameterError

BODY_METHODS = frozenset(["POST", "PUT"])

# Keys whose string values are already-encoded media payloads
DATA_KEYS = frozenset(["data", "data64"])

PLACEHOLDER_PATTERN = re.compile(r"/:[A-Za-z_][A-Za-z0-9_]*")


class BodyKind(enum.Enum):
    NONE = "none"
    JSON = "json"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class LogicalRequest:
    """A resolved API call: method, path, params and the origin it targets."""

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    base_url: str = "https://api.tumblr.com/"


@dataclass(frozen=True)
class MultipartPart:
    """One form-data part. Parts without a filename are plain fields."""

    name: str
    value: Any  # str, bytes or a readable binary stream
    filename: str | None = None
    content_type: str | None = None


@dataclass(frozen=True)
class WireRequest:
    """Fully resolved HTTP request, ready for signing and sending."""

    method: str
    url: str  # absolute, without query
    query: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    body_kind: BodyKind = BodyKind.NONE
    content: bytes | None = None
    parts: tuple[MultipartPart, ...] = ()

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{urlencode(self.query, quote_via=quote)}"

    def with_query(self, query: tuple[tuple[str, str], ...]) -> "WireRequest":
        return replace(self, query=query)

    def with_header(self, name: str, value: str) -> "WireRequest":
        return replace(self, headers={**self.headers, name: value})

    def to_httpx(self) -> httpx.Request:
        """Build the httpx request this wire request describes."""
        if self.body_kind is BodyKind.MULTIPART:
            # Every part goes through ``files`` so order is kept and httpx
            # always encodes multipart; a None filename renders a plain field.
            files = [(part.name, _file_tuple(part)) for part in self.parts]
            return httpx.Request(self.method, self.full_url, headers=dict(self.headers), files=files)

        return httpx.Request(self.method, self.full_url, headers=dict(self.headers), content=self.content)


def _file_tuple(part: MultipartPart) -> tuple:
    value = part.value.encode("utf-8") if isinstance(part.value, str) else part.value
    if part.filename is None:
        return (None, value)
    return (part.filename, value, part.content_type or "application/octet-stream")


def is_binary(value: Any) -> bool:
    """Raw bytes or a readable byte stream."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return True
    if isinstance(value, io.TextIOBase):
        return False
    return isinstance(value, io.IOBase) or hasattr(value, "read")


def _is_attachment(key: str, value: Any) -> bool:
    if is_binary(value):
        return True
    return key in DATA_KEYS and isinstance(value, str)


def _has_binary(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return any(is_binary(item) for item in value)
    return is_binary(value)


def has_attachments(params: Mapping[str, Any]) -> bool:
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            if any(_is_attachment(key, item) for item in value):
                return True
        elif _is_attachment(key, value):
            return True
    return False


def stringify(value: Any) -> str:
    """Scalar to its wire form: ``true``/``false`` for booleans, JSON for dicts."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def flatten_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten params into ordered pairs, lists as ``name[0]``, ``name[1]``, ..."""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                if item is not None:
                    pairs.append((f"{key}[{index}]", stringify(item)))
        else:
            pairs.append((key, stringify(value)))
    return pairs


def _attachment_filename(name: str, value: Any) -> str:
    stream_name = getattr(value, "name", None)
    if isinstance(stream_name, str) and stream_name:
        return stream_name.replace("\\", "/").rsplit("/", 1)[-1]
    return name


def _attachment_part(name: str, value: Any) -> MultipartPart:
    if isinstance(value, str):
        return MultipartPart(name=name, value=value)
    if isinstance(value, (bytearray, memoryview)):
        value = bytes(value)
    return MultipartPart(name=name, value=value, filename=_attachment_filename(name, value))


def multipart_parts(params: Mapping[str, Any]) -> tuple[MultipartPart, ...]:
    """Plain fields first in order, then attachments.

    A single attachment is named after its key, the n-th element of a list of
    attachments is named ``key[n]``.
    """
    fields: list[MultipartPart] = []
    attachments: list[MultipartPart] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                name = f"{key}[{index}]"
                if _is_attachment(key, item):
                    attachments.append(_attachment_part(name, item))
                elif item is not None:
                    fields.append(MultipartPart(name=name, value=stringify(item)))
        elif _is_attachment(key, value):
            attachments.append(_attachment_part(key, value))
        else:
            fields.append(MultipartPart(name=key, value=stringify(value)))
    return tuple(fields + attachments)


def encode_json(params: Mapping[str, Any]) -> bytes:
    return json.dumps(dict(params), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_request(logical: LogicalRequest, user_agent: str) -> WireRequest:
    """Build the unsigned wire request for a logical call.

    Args:
        logical: The call to perform
        user_agent: ``User-Agent`` header value

    Returns:
        WireRequest with query, headers and body resolved

    Raises:
        InvalidParameterError: If the path still holds a ``:name`` placeholder
            or the method is not GET, POST or PUT, or a GET carries binary
            params
    """
    method = logical.method.upper()
    if method not in BODY_METHODS and method != "GET":
        raise InvalidParameterError(f"Unsupported request method: {logical.method}")

    resolved = httpx.URL(logical.base_url).join(logical.path)
    if PLACEHOLDER_PATTERN.search(resolved.path):
        raise InvalidParameterError(f"Unresolved path parameter in {logical.path}")

    url_pairs = resolved.params.multi_items()
    url = str(resolved.copy_with(query=None, fragment=None))
    headers = {"Accept": "application/json", "User-Agent": user_agent}

    if method == "GET":
        binary = [key for key, value in logical.params.items() if _has_binary(value)]
        if binary:
            raise InvalidParameterError(f"Binary params cannot be sent in a GET query: {', '.join(binary)}")
        query = tuple(url_pairs) + tuple(flatten_params(logical.params))
        return WireRequest(method=method, url=url, query=query, headers=headers)

    # Query pairs on a POST/PUT path travel in the body; explicit params win
    params: dict[str, Any] = {key: value for key, value in logical.params.items() if value is not None}
    for key, value in url_pairs:
        params.setdefault(key, value)

    if not params:
        headers["Content-Length"] = "0"
        return WireRequest(method=method, url=url, headers=headers)

    if has_attachments(params):
        return WireRequest(
            method=method,
            url=url,
            headers=headers,
            body_kind=BodyKind.MULTIPART,
            parts=multipart_parts(params),
        )

    content = encode_json(params)
    headers["Content-Type"] = "application/json"
    headers["Content-Length"] = str(len(content))
    return WireRequest(method=method, url=url, headers=headers, body_kind=BodyKind.JSON, content=content)
