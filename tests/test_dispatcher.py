"""Tests for the request dispatcher."""

import base64
import json
import threading
import time

import httpx
import pytest

from mailchimp_client.core.context import RequestContext
from mailchimp_client.core.dispatcher import (
    AUTH_USERNAME,
    Dispatcher,
    decode,
    endpoint_for_key,
)
from mailchimp_client.core.models import (
    ConfigError,
    DecodeError,
    MailchimpError,
    RawHTTPError,
    StructuredAPIError,
    TransportError,
)
from mailchimp_client.core.params import BasicQueryParams, CampaignQueryParams, ExtendedQueryParams
from mailchimp_client.resources.campaigns import Campaign, CampaignCreationRequest, ListOfCampaigns

API_KEY = "abc123-us6"

PROBLEM = {
    "type": "https://mailchimp.com/developer/marketing/docs/errors/",
    "title": "Internal Server Error",
    "status": 500,
    "detail": "An unexpected internal error has occurred.",
    "instance": "995c5cb0-3280-4a6e-808b-3b096d0bb219",
}


class Recorder:
    """Mock transport handler that records requests and replays one response."""

    def __init__(self, status_code=200, json_body=None, content=b""):
        self.status_code = status_code
        self.content = json.dumps(json_body).encode() if json_body is not None else content
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_dispatcher(handler, **kwargs) -> Dispatcher:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return Dispatcher(api_key=API_KEY, http_client=http_client, **kwargs)


@pytest.fixture
def recorder():
    return Recorder(json_body={"id": "c1", "status": "save"})


@pytest.fixture
def dispatcher(recorder):
    return make_dispatcher(recorder)


# ===== Construction =====

@pytest.mark.parametrize("key,endpoint", [
    ("abc123-us6", "https://us6.api.mailchimp.com/3.0"),
    ("abc123-us21", "https://us21.api.mailchimp.com/3.0"),
    ("abc123", "https://us1.api.mailchimp.com/3.0"),
    ("abc123-", "https://us1.api.mailchimp.com/3.0"),
])
def test_endpoint_for_key(key, endpoint):
    """Test endpoint derivation from the key datacenter."""
    assert endpoint_for_key(key) == endpoint


def test_dispatcher_requires_api_key():
    with pytest.raises(ConfigError):
        Dispatcher(api_key="")


def test_explicit_endpoint_wins():
    dispatcher = Dispatcher(api_key=API_KEY, endpoint="http://localhost:8080/3.0/")
    assert dispatcher.endpoint == "http://localhost:8080/3.0"
    dispatcher.close()


def test_owned_client_is_closed():
    """Test that close() only closes a transport the dispatcher created."""
    owned = Dispatcher(api_key=API_KEY)
    assert owned._owns_client is True
    owned.close()
    assert owned.http_client.is_closed

    borrowed_client = httpx.Client()
    with Dispatcher(api_key=API_KEY, http_client=borrowed_client) as borrowed:
        assert borrowed._owns_client is False
    assert not borrowed_client.is_closed
    borrowed_client.close()


# ===== Request construction =====

def test_request_url_auth_and_headers(dispatcher, recorder):
    """Test URL, basic auth and content type on the wire."""
    dispatcher.request("GET", "/campaigns/c1", response_type=Campaign)

    request = recorder.last
    assert str(request.url) == "https://us6.api.mailchimp.com/3.0/campaigns/c1"
    assert request.headers["Content-Type"] == "application/json"

    scheme, _, token = request.headers["Authorization"].partition(" ")
    assert scheme == "Basic"
    username, _, password = base64.b64decode(token).decode().partition(":")
    assert username == AUTH_USERNAME
    assert password == API_KEY


def test_request_without_body_sends_zero_length_body(dispatcher, recorder):
    dispatcher.request("GET", "/campaigns/c1")

    assert recorder.last.content == b""


def test_request_body_is_json(dispatcher, recorder):
    dispatcher.request("POST", "/campaigns", body=CampaignCreationRequest(type="plaintext"))

    assert json.loads(recorder.last.content) == {"type": "plaintext"}


def test_query_params_are_composed(dispatcher, recorder):
    """Test that layered parameters reach the query string, minus empty values."""
    params = CampaignQueryParams(
        extended=ExtendedQueryParams(basic=BasicQueryParams(status="save"), count=10),
        status="sent",
        list_id="L1",
    )

    dispatcher.request("GET", "/campaigns", params=params)

    query = dict(recorder.last.url.params)
    assert query == {"status": "sent", "count": "10", "list_id": "L1"}


def test_no_query_string_when_params_empty(dispatcher, recorder):
    dispatcher.request("GET", "/campaigns", params=BasicQueryParams())

    assert recorder.last.url.query == b""


# ===== Response handling =====

def test_decodes_and_wires_response(dispatcher):
    campaign = dispatcher.request("GET", "/campaigns/c1", response_type=Campaign)

    assert isinstance(campaign, Campaign)
    assert campaign.id == "c1"
    assert campaign.api is dispatcher


def test_no_response_type_returns_none(dispatcher):
    assert dispatcher.request("POST", "/campaigns/c1/actions/send") is None


def test_empty_success_returns_default_instance():
    """Test that an empty 2xx body is not a decode error."""
    dispatcher = make_dispatcher(Recorder(status_code=204))

    result = dispatcher.request("GET", "/campaigns", response_type=ListOfCampaigns)

    assert isinstance(result, ListOfCampaigns)
    assert result.campaigns == []
    assert result.api is dispatcher


def test_structured_error_is_raised():
    dispatcher = make_dispatcher(Recorder(status_code=500, json_body=PROBLEM))

    with pytest.raises(StructuredAPIError) as exc_info:
        dispatcher.request("GET", "/campaigns/c1", response_type=Campaign)

    error = exc_info.value
    assert error.status_code == 500
    assert error.type == PROBLEM["type"]
    assert error.title == PROBLEM["title"]
    assert error.status == 500
    assert error.detail == PROBLEM["detail"]
    assert error.instance == PROBLEM["instance"]


def test_raw_error_is_raised():
    dispatcher = make_dispatcher(Recorder(status_code=502, content=b"upstream gone"))

    with pytest.raises(RawHTTPError) as exc_info:
        dispatcher.request("GET", "/campaigns")

    assert exc_info.value.status_code == 502
    assert exc_info.value.body == "upstream gone"


def test_invalid_json_on_success_is_decode_error():
    dispatcher = make_dispatcher(Recorder(status_code=200, content=b"<html>"))

    with pytest.raises(DecodeError) as exc_info:
        dispatcher.request("GET", "/campaigns/c1", response_type=Campaign)

    assert exc_info.value.status_code == 200


def test_wrong_shape_on_success_is_decode_error():
    dispatcher = make_dispatcher(Recorder(status_code=200, json_body=["c1"]))

    with pytest.raises(DecodeError):
        dispatcher.request("GET", "/campaigns/c1", response_type=Campaign)


def test_decode_builtin_types():
    assert decode(dict, b'{"a": 1}', 200) == {"a": 1}
    with pytest.raises(DecodeError):
        decode(dict, b"[1]", 200)


def test_transport_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    dispatcher = make_dispatcher(handler)

    with pytest.raises(TransportError):
        dispatcher.request("GET", "/campaigns")


# ===== request_ok =====

def test_request_ok_success():
    dispatcher = make_dispatcher(Recorder(status_code=204))

    assert dispatcher.request_ok("POST", "/campaigns/c1/actions/send") == (True, None)


def test_request_ok_failure_returns_error():
    dispatcher = make_dispatcher(Recorder(status_code=404, json_body={**PROBLEM, "status": 404}))

    ok, error = dispatcher.request_ok("DELETE", "/campaigns/missing")

    assert ok is False
    assert isinstance(error, StructuredAPIError)
    assert isinstance(error, MailchimpError)
    assert error.status_code == 404


# ===== Cancellation and deadlines =====

def test_cancelled_context_aborts_before_send(recorder, dispatcher):
    context = RequestContext()
    context.cancel()

    with pytest.raises(TransportError):
        dispatcher.request("GET", "/campaigns", context=context)

    assert recorder.requests == []


def test_expired_deadline_aborts_before_send(recorder, dispatcher):
    context = RequestContext(timeout=0)

    with pytest.raises(TransportError):
        dispatcher.request("GET", "/campaigns", context=context)

    assert recorder.requests == []


def test_cancel_while_reading_closes_response():
    """Test that cancelling mid-body raises and still closes the response."""
    context = RequestContext()
    closed = threading.Event()

    class CancellingStream(httpx.SyncByteStream):
        def __iter__(self):
            yield b'{"id": '
            context.cancel()
            yield b'"c1"}'

        def close(self):
            closed.set()

    dispatcher = make_dispatcher(lambda request: httpx.Response(200, stream=CancellingStream()))

    with pytest.raises(TransportError):
        dispatcher.request("GET", "/campaigns/c1", response_type=Campaign, context=context)

    assert closed.wait(2)


class SlowStream(httpx.SyncByteStream):
    """Response body that records when it is closed."""

    def __init__(self):
        self.closed = threading.Event()

    def __iter__(self):
        yield b'{"id": "c1"}'

    def close(self):
        self.closed.set()


def slow_dispatcher(release: threading.Event, stream: SlowStream) -> Dispatcher:
    """Dispatcher whose server only answers once ``release`` is set."""
    def handler(request):
        release.wait(5)
        return httpx.Response(200, stream=stream)

    return make_dispatcher(handler)


def test_cancel_while_waiting_for_response():
    """Test that a cancel from another thread returns before the server answers."""
    release = threading.Event()
    stream = SlowStream()
    dispatcher = slow_dispatcher(release, stream)
    context = RequestContext()
    timer = threading.Timer(0.1, context.cancel)

    started = time.monotonic()
    timer.start()
    try:
        with pytest.raises(TransportError) as exc_info:
            dispatcher.request("GET", "/campaigns/c1", response_type=Campaign, context=context)
        elapsed = time.monotonic() - started
    finally:
        timer.cancel()
        release.set()

    assert elapsed < 1.0
    assert "cancelled" in str(exc_info.value)
    # The late response is closed rather than read
    assert stream.closed.wait(2)
    dispatcher.close()


def test_deadline_while_waiting_for_response():
    """Test that the deadline returns control while the server is still silent."""
    release = threading.Event()
    stream = SlowStream()
    dispatcher = slow_dispatcher(release, stream)

    started = time.monotonic()
    try:
        with pytest.raises(TransportError) as exc_info:
            dispatcher.request("GET", "/campaigns/c1", context=RequestContext(timeout=0.1))
        elapsed = time.monotonic() - started
    finally:
        release.set()

    assert elapsed < 1.0
    assert "deadline" in str(exc_info.value)
    assert stream.closed.wait(2)
    dispatcher.close()


def test_context_call_returns_response_when_not_cancelled(recorder, dispatcher):
    """Test that a call with a context still completes normally."""
    campaign = dispatcher.request("GET", "/campaigns/c1", response_type=Campaign, context=RequestContext())

    assert campaign.id == "c1"
    assert campaign.api is dispatcher


def test_deadline_sets_request_timeout(recorder, dispatcher):
    dispatcher.request("GET", "/campaigns", context=RequestContext(timeout=5))

    timeout = recorder.last.extensions["timeout"]
    assert 0 < timeout["read"] <= 5


def test_debug_logs_bodies(recorder, caplog):
    dispatcher = make_dispatcher(recorder, debug=True)

    with caplog.at_level("DEBUG", logger="mailchimp_client.core.dispatcher"):
        dispatcher.request("POST", "/campaigns", body=CampaignCreationRequest())

    assert "Request body" in caplog.text
    assert "Response body" in caplog.text
