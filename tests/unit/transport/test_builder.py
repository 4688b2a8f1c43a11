"""Tests for building wire requests."""

import io
import json

import pytest

from tumblr_client.errors import InvalidParameterError
from tumblr_client.transport.builder import (
    BodyKind,
    LogicalRequest,
    MultipartPart,
    build_request,
    flatten_params,
    has_attachments,
    is_binary,
    multipart_parts,
    stringify,
)

BASE_URL = "https://example.com/"
USER_AGENT = "tumblr-client/test"


def build(method, path, params=None):
    return build_request(LogicalRequest(method=method, path=path, params=params or {}, base_url=BASE_URL), USER_AGENT)


@pytest.mark.unit
class TestStringify:
    """Test scalar wire forms."""

    def test_booleans(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_numbers_and_strings(self):
        assert stringify(5) == "5"
        assert stringify("lizard") == "lizard"

    def test_dict_is_compact_json(self):
        assert stringify({"a": 1, "b": "é"}) == '{"a":1,"b":"é"}'


@pytest.mark.unit
class TestFlattenParams:
    """Test query flattening."""

    def test_lists_are_indexed(self):
        """Test that list values become name[0], name[1], ..."""
        assert flatten_params({"tag": ["a", "b"]}) == [("tag[0]", "a"), ("tag[1]", "b")]

    def test_order_is_kept(self):
        """Test that params keep insertion order."""
        assert flatten_params({"z": 1, "a": 2}) == [("z", "1"), ("a", "2")]

    def test_none_is_skipped(self):
        """Test that None values are not sent."""
        assert flatten_params({"before": None, "limit": 5}) == [("limit", "5")]


@pytest.mark.unit
class TestAttachmentDetection:
    """Test which values force a multipart body."""

    def test_is_binary(self):
        assert is_binary(b"abc")
        assert is_binary(bytearray(b"abc"))
        assert is_binary(io.BytesIO(b"abc"))
        assert not is_binary("abc")
        assert not is_binary(io.StringIO("abc"))

    def test_bytes_anywhere(self):
        assert has_attachments({"caption": "x", "image": b"\x89PNG"})

    def test_string_data_keys(self):
        """Test that string data and data64 values are attachments."""
        assert has_attachments({"data": "aGVsbG8="})
        assert has_attachments({"data64": "aGVsbG8="})

    def test_list_of_attachments(self):
        assert has_attachments({"data": [b"a", b"b"]})

    def test_plain_params(self):
        assert not has_attachments({"caption": "hello", "tags": ["a"], "native_inline_images": True})


@pytest.mark.unit
class TestMultipartParts:
    """Test multipart part layout."""

    def test_fields_before_attachments(self):
        """Test that plain fields come first, in order, then attachments."""
        parts = multipart_parts({"data": b"\x89PNG", "caption": "hi", "tags": ["a", "b"], "private": True})

        assert parts == (
            MultipartPart(name="caption", value="hi"),
            MultipartPart(name="tags[0]", value="a"),
            MultipartPart(name="tags[1]", value="b"),
            MultipartPart(name="private", value="true"),
            MultipartPart(name="data", value=b"\x89PNG", filename="data"),
        )

    def test_string_data_is_plain_part(self):
        """Test that a string data value is sent without a filename."""
        assert multipart_parts({"data": "aGVsbG8="}) == (MultipartPart(name="data", value="aGVsbG8="),)

    def test_list_of_attachments_indexed(self):
        """Test that the n-th attachment of a list is named key[n]."""
        parts = multipart_parts({"data": [b"a", b"b"]})

        assert [part.name for part in parts] == ["data[0]", "data[1]"]
        assert [part.filename for part in parts] == ["data[0]", "data[1]"]

    def test_stream_filename(self, tmp_path):
        """Test that a named stream keeps its base name."""
        image = tmp_path / "lizard.png"
        image.write_bytes(b"\x89PNG")

        with image.open("rb") as stream:
            (part,) = multipart_parts({"data": stream})

        assert part.filename == "lizard.png"

    def test_none_is_skipped(self):
        assert multipart_parts({"data": b"x", "caption": None}) == (
            MultipartPart(name="data", value=b"x", filename="data"),
        )


@pytest.mark.unit
class TestBuildGet:
    """Test GET request building."""

    def test_params_go_to_query(self):
        """Test that GET params are query pairs after the path's own query."""
        wire = build("GET", "/v2/blog/x/posts?search=string", {"tag": ["a", "b"], "reblog_info": True})

        assert wire.url == "https://example.com/v2/blog/x/posts"
        assert wire.query == (("search", "string"), ("tag[0]", "a"), ("tag[1]", "b"), ("reblog_info", "true"))
        assert wire.body_kind is BodyKind.NONE
        assert wire.content is None

    def test_headers(self):
        """Test that Accept and User-Agent are always set."""
        wire = build("GET", "/v2/user/info")

        assert wire.headers == {"Accept": "application/json", "User-Agent": USER_AGENT}

    def test_full_url_encoding(self):
        """Test that spaces encode as %20 in the final URL."""
        wire = build("GET", "/v2/tagged", {"tag": "green lizard"})

        assert wire.full_url == "https://example.com/v2/tagged?tag=green%20lizard"

    def test_method_is_case_insensitive(self):
        assert build("get", "/v2/user/info").method == "GET"


@pytest.mark.unit
class TestBuildBody:
    """Test POST and PUT request building."""

    def test_json_body(self):
        """Test compact JSON with exact Content-Length."""
        wire = build("POST", "/v2/blog/x/posts", {"foo": "bar"})

        assert wire.body_kind is BodyKind.JSON
        assert wire.content == b'{"foo":"bar"}'
        assert wire.headers["Content-Type"] == "application/json"
        assert wire.headers["Content-Length"] == "13"
        assert wire.query == ()

    def test_json_content_length_counts_bytes(self):
        """Test that non-ASCII text is measured in encoded bytes."""
        wire = build("PUT", "/v2/blog/x/posts/1", {"text": "😀"})

        assert wire.content == '{"text":"😀"}'.encode()
        assert wire.headers["Content-Length"] == str(len(wire.content))
        assert int(wire.headers["Content-Length"]) > len('{"text":"😀"}')

    def test_nested_values_stay_json(self):
        """Test that NPF content lists are sent as JSON, not flattened."""
        content = [{"type": "text", "text": "hello"}]
        wire = build("POST", "/v2/blog/x/posts", {"content": content, "tags": "a,b"})

        assert json.loads(wire.content) == {"content": content, "tags": "a,b"}

    def test_path_query_moves_to_body(self):
        """Test that query pairs on a POST path join the body."""
        wire = build("POST", "/v2/user/follow?url=staff.tumblr.com")

        assert wire.url == "https://example.com/v2/user/follow"
        assert wire.query == ()
        assert json.loads(wire.content) == {"url": "staff.tumblr.com"}

    def test_explicit_params_win_over_path_query(self):
        wire = build("POST", "/v2/x?foo=1", {"foo": "2"})

        assert json.loads(wire.content) == {"foo": "2"}

    def test_empty_body(self):
        """Test that an empty POST has no body and Content-Length 0."""
        wire = build("POST", "/v2/user/like")

        assert wire.body_kind is BodyKind.NONE
        assert wire.content is None
        assert wire.headers["Content-Length"] == "0"
        assert "Content-Type" not in wire.headers

    def test_none_values_left_out_of_json(self):
        """Test that None params are omitted from a JSON body."""
        wire = build("POST", "/v2/blog/x/posts", {"a": 1, "b": None})

        assert wire.content == b'{"a":1}'
        assert wire.headers["Content-Length"] == "7"

    def test_only_none_values_is_empty_body(self):
        """Test that params holding only None send no body at all."""
        wire = build("POST", "/v2/user/like", {"b": None})

        assert wire.body_kind is BodyKind.NONE
        assert wire.content is None
        assert wire.headers["Content-Length"] == "0"
        assert "Content-Type" not in wire.headers

    def test_none_param_does_not_hide_path_query(self):
        wire = build("POST", "/v2/user/follow?url=staff.tumblr.com", {"url": None})

        assert json.loads(wire.content) == {"url": "staff.tumblr.com"}

    def test_multipart_body(self):
        """Test that binary params select a multipart body."""
        wire = build("POST", "/v2/blog/x/post", {"type": "photo", "data": b"\x89PNG"})

        assert wire.body_kind is BodyKind.MULTIPART
        assert wire.parts == (
            MultipartPart(name="type", value="photo"),
            MultipartPart(name="data", value=b"\x89PNG", filename="data"),
        )
        assert "Content-Type" not in wire.headers

    def test_multipart_to_httpx(self):
        """Test the encoded multipart request."""
        wire = build("POST", "/v2/blog/x/post", {"type": "photo", "data": "aGVsbG8=", "image": b"raw"})
        request = wire.to_httpx()
        body = request.read()

        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'Content-Disposition: form-data; name="type"\r\n\r\nphoto\r\n' in body
        assert b'Content-Disposition: form-data; name="data"\r\n' in body
        assert b'name="image"; filename="image"\r\nContent-Type: application/octet-stream\r\n' in body
        assert body.index(b'name="type"') < body.index(b'name="data"') < body.index(b'name="image"')


@pytest.mark.unit
class TestBuildErrors:
    """Test rejected requests."""

    def test_unsupported_method(self):
        with pytest.raises(InvalidParameterError, match="DELETE"):
            build("DELETE", "/v2/blog/x/post")

    def test_unresolved_placeholder(self):
        """Test that a template path cannot be sent."""
        with pytest.raises(InvalidParameterError, match="blog_identifier"):
            build("GET", "/v2/blog/:blog_identifier/info")

    @pytest.mark.parametrize("value", [b"raw", [b"a", b"b"], io.BytesIO(b"raw")])
    def test_binary_get_params(self, value):
        """Test that binary values are not turned into query text."""
        with pytest.raises(InvalidParameterError, match="avatar"):
            build("GET", "/v2/user/info", {"limit": 5, "avatar": value})

    def test_string_data_on_get_is_allowed(self):
        wire = build("GET", "/v2/user/info", {"data": "aGVsbG8="})

        assert wire.query == (("data", "aGVsbG8="),)
