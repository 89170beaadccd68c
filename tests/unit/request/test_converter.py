"""Unit tests for HttpConverter"""
from dataclasses import dataclass
from typing import Any

import pytest

from rest_client.request_execution.converter import HttpConverter, merge_parameters
from rest_client.request_execution.models import (
    ErrorKind,
    Method,
    Parameter,
    ParameterType,
    ResponseCookie,
    ResponseStatus,
    RestRequest,
    TransportResponse,
)


@dataclass
class StubSettings:
    """Minimal client settings for exercising the converter in isolation"""
    base_url: str | None = "http://api.example.com"
    timeout: float | None = None
    follow_redirects: bool = True
    max_redirects: int | None = None
    proxy: str | None = None
    cookie_jar: Any | None = None
    default_parameters: tuple[Parameter, ...] = ()
    default_accept_types: tuple[str, ...] = ()
    user_agent: str = "RestClient/test"


@pytest.mark.unit
@pytest.mark.request
class TestMergeParameters:

    def test_request_wins_on_name_and_kind(self):
        defaults = [Parameter("page", 1), Parameter("size", 10)]
        request = [Parameter("page", 5)]

        merged = merge_parameters(defaults, request)

        assert merged == [Parameter("page", 5), Parameter("size", 10)]

    def test_headers_collide_case_insensitively(self):
        defaults = [Parameter("Accept", "application/json", ParameterType.HTTP_HEADER)]
        request = [Parameter("accept", "text/plain", ParameterType.HTTP_HEADER)]

        merged = merge_parameters(defaults, request)

        assert merged == request

    def test_different_kinds_never_collide(self):
        """
        GIVEN a default header and a request query parameter with the same name
        WHEN merging
        THEN both are kept
        """
        defaults = [Parameter("token", "a", ParameterType.HTTP_HEADER)]
        request = [Parameter("token", "b", ParameterType.QUERY_STRING)]

        merged = merge_parameters(defaults, request)

        assert len(merged) == 2


@pytest.mark.unit
@pytest.mark.request
class TestBuildUri:
    """Tests for URL composition"""

    def test_base_url_and_resource_are_joined(self):
        uri = HttpConverter().build_uri(StubSettings(), RestRequest(resource="/widgets"))

        assert uri == "http://api.example.com/widgets"

    def test_empty_resource_uses_base_url(self):
        uri = HttpConverter().build_uri(StubSettings(), RestRequest())

        assert uri == "http://api.example.com"

    def test_absolute_resource_bypasses_base_url(self):
        uri = HttpConverter().build_uri(
            StubSettings(), RestRequest(resource="https://other.example.com/x")
        )

        assert uri == "https://other.example.com/x"

    def test_no_base_url_uses_resource(self):
        uri = HttpConverter().build_uri(StubSettings(base_url=None), RestRequest(resource="http://h/x"))

        assert uri == "http://h/x"

    def test_url_segments_are_encoded(self):
        request = (
            RestRequest(resource="users/{user}/files/{name}")
            .add_url_segment("user", 42)
            .add_url_segment("name", "a b/c")
        )

        uri = HttpConverter().build_uri(StubSettings(), request)

        assert uri == "http://api.example.com/users/42/files/a%20b%2Fc"

    def test_get_or_post_goes_to_query_for_get_style(self):
        request = RestRequest(method=Method.DELETE, resource="widgets").add_parameter("id", 3)

        uri = HttpConverter().build_uri(StubSettings(), request)

        assert uri == "http://api.example.com/widgets?id=3"

    def test_get_or_post_stays_out_of_query_for_post_style(self):
        request = (
            RestRequest(method=Method.POST, resource="widgets")
            .add_parameter("name", "gear")
            .add_query_parameter("dry_run", True)
        )

        uri = HttpConverter().build_uri(StubSettings(), request)

        assert uri == "http://api.example.com/widgets?dry_run=true"

    def test_existing_query_string_is_extended(self):
        request = RestRequest(resource="search?q=x").add_query_parameter("page", 2)

        uri = HttpConverter().build_uri(StubSettings(), request)

        assert uri == "http://api.example.com/search?q=x&page=2"

    def test_query_values_are_encoded(self):
        request = RestRequest(resource="search").add_query_parameter("q", "a&b=c")

        uri = HttpConverter().build_uri(StubSettings(), request)

        assert uri == "http://api.example.com/search?q=a%26b%3Dc"

    def test_default_url_segment_is_applied(self):
        settings = StubSettings(
            default_parameters=(Parameter("version", "v1", ParameterType.URL_SEGMENT),)
        )

        uri = HttpConverter().build_uri(settings, RestRequest(resource="{version}/widgets"))

        assert uri == "http://api.example.com/v1/widgets"


@pytest.mark.unit
@pytest.mark.request
class TestConvertTo:
    """Tests for RestRequest -> TransportRequest"""

    def test_get_style_has_no_form_parameters(self):
        request = RestRequest(resource="widgets").add_parameter("page", 1)

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert sent.method == "GET"
        assert sent.parameters == []
        assert sent.url.endswith("?page=1")

    def test_post_style_puts_get_or_post_into_form(self):
        """
        GIVEN a PUT request with a GET_OR_POST parameter
        WHEN converting
        THEN the parameter goes to the form body, not the query
        """
        request = RestRequest(method=Method.PUT, resource="widgets/1").add_parameter("name", "gear")

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert sent.method == "PUT"
        assert sent.parameters == [("name", "gear")]
        assert "?" not in sent.url

    def test_headers_and_cookies(self):
        request = (
            RestRequest(resource="widgets")
            .add_header("X-Trace", "abc")
            .add_cookie("session", "s1")
        )

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert ("X-Trace", "abc") in sent.headers
        assert sent.cookies == {"session": "s1"}

    def test_accept_injected_from_accept_types(self):
        settings = StubSettings(default_accept_types=("application/json", "application/xml"))

        sent = HttpConverter().convert_to(settings, RestRequest(resource="widgets"))

        assert ("Accept", "application/json, application/xml") in sent.headers

    def test_explicit_accept_is_kept(self):
        settings = StubSettings(default_accept_types=("application/json",))
        request = RestRequest(resource="widgets").add_header("accept", "text/csv")

        sent = HttpConverter().convert_to(settings, request)

        accepts = [v for k, v in sent.headers if k.lower() == "accept"]
        assert accepts == ["text/csv"]

    def test_user_agent_from_client_or_request(self):
        converter = HttpConverter()

        assert converter.convert_to(StubSettings(), RestRequest()).user_agent == "RestClient/test"
        assert converter.convert_to(StubSettings(), RestRequest(user_agent="x/1")).user_agent == "x/1"

    @pytest.mark.parametrize(
        "client_timeout,request_timeout,expected",
        [
            (None, None, None),
            (10, None, 10),
            (10, 0, 10),
            (10, 2.5, 2.5),
            (0, None, None),
            (-1, None, None),
        ],
    )
    def test_timeout_applied_only_when_positive(self, client_timeout, request_timeout, expected):
        sent = HttpConverter().convert_to(
            StubSettings(timeout=client_timeout), RestRequest(timeout=request_timeout)
        )

        assert sent.timeout == expected

    def test_client_transport_settings_are_copied(self):
        jar = object()
        settings = StubSettings(follow_redirects=False, max_redirects=3, proxy="http://proxy:3128", cookie_jar=jar)
        request = RestRequest(credentials=("user", "pass"), always_multipart_form_data=True)

        sent = HttpConverter().convert_to(settings, request)

        assert sent.follow_redirects is False
        assert sent.max_redirects == 3
        assert sent.proxy == "http://proxy:3128"
        assert sent.cookie_jar is jar
        assert sent.credentials == ("user", "pass")
        assert sent.always_multipart_form_data is True

    def test_string_body(self):
        request = RestRequest(method=Method.POST).add_json_body({"id": 1})

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert sent.body == '{"id": 1}'
        assert sent.body_bytes is None
        assert sent.body_content_type == "application/json"
        assert sent.has_body

    def test_bytes_body(self):
        request = RestRequest(method=Method.POST).add_body(b"\x00\x01", "application/octet-stream")

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert sent.body is None
        assert sent.body_bytes == b"\x00\x01"
        assert sent.body_content_type == "application/octet-stream"

    def test_files_are_forwarded(self):
        request = RestRequest(method=Method.POST).add_file("upload", b"data", "a.txt", "text/plain")

        sent = HttpConverter().convert_to(StubSettings(), request)

        assert len(sent.files) == 1
        assert sent.files[0].content_length == 4


@pytest.mark.unit
@pytest.mark.request
class TestConvertFrom:
    """Tests for TransportResponse -> RestResponse"""

    def test_fields_are_copied(self):
        cookie = ResponseCookie(name="sid", value="1")
        transport_response = TransportResponse(
            status_code=201,
            status_description="Created",
            content="{}",
            content_encoding="gzip",
            content_length=2,
            content_type="application/json",
            raw_bytes=b"{}",
            response_uri="http://api.example.com/widgets/1",
            server="nginx",
            headers=[("Location", "/widgets/1"), ("Set-Cookie", "sid=1")],
            cookies=[cookie],
            response_status=ResponseStatus.COMPLETED,
        )
        request = RestRequest(resource="widgets")

        response = HttpConverter().convert_from(transport_response, request)

        assert response.request is request
        assert response.status_code == 201
        assert response.status_description == "Created"
        assert response.content == "{}"
        assert response.content_encoding == "gzip"
        assert response.content_length == 2
        assert response.raw_bytes == b"{}"
        assert response.response_uri == "http://api.example.com/widgets/1"
        assert response.server == "nginx"
        assert response.cookies == [cookie]
        assert response.header("location") == "/widgets/1"
        assert all(h.type == ParameterType.HTTP_HEADER for h in response.headers)
        assert response.error is None

    def test_transport_error_becomes_execution_error(self):
        exc = ConnectionResetError("reset")
        transport_response = TransportResponse(
            response_status=ResponseStatus.ERROR,
            error_message="reset",
            error_exception=exc,
        )

        response = HttpConverter().convert_from(transport_response)

        assert response.response_status == ResponseStatus.ERROR
        assert response.error.kind == ErrorKind.TRANSPORT
        assert response.error_message == "reset"
        assert response.error_exception is exc
