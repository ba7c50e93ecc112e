"""
Request dispatcher.

Owns the service endpoint, the API key and the HTTP transport, and runs one
request/response cycle end to end: build, send, classify, decode, wire.
"""

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import is_dataclass
from typing import Any

import httpx

from .classifier import Classification, classify, truncate
from .context import RequestContext
from .models import ConfigError, DecodeError, MailchimpError, TransportError
from .params import QueryParams, build_query
from .schema import from_dict, to_dict, wire

logger = logging.getLogger(__name__)

DEFAULT_DATACENTER = "us1"
ENDPOINT_TEMPLATE = "https://{datacenter}.api.mailchimp.com/3.0"
DEFAULT_TIMEOUT = 30.0

# The service only checks the password half of basic auth
AUTH_USERNAME = "mailchimp-client"


def endpoint_for_key(api_key: str) -> str:
    """
    Derive the API endpoint from the datacenter suffix of an API key.

    Args:
        api_key: Key such as "0123abcd-us6"

    Returns:
        Endpoint URL such as "https://us6.api.mailchimp.com/3.0"
    """
    _, sep, datacenter = api_key.rpartition("-")
    if not sep or not datacenter:
        datacenter = DEFAULT_DATACENTER
    return ENDPOINT_TEMPLATE.format(datacenter=datacenter)


def decode(response_type: Any, raw: bytes, status_code: int) -> Any:
    """
    Decode a JSON body into the requested type.

    Raises:
        DecodeError: If the body is not JSON or does not fit the type
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON response: {e}", status_code=status_code) from e

    try:
        if is_dataclass(response_type):
            return from_dict(response_type, data)
        if not isinstance(data, response_type):
            raise TypeError(f"got {type(data).__name__}")
        return data
    except (TypeError, ValueError, KeyError) as e:
        name = getattr(response_type, "__name__", str(response_type))
        raise DecodeError(
            f"Cannot decode response into {name}: {e}",
            status_code=status_code,
        ) from e


class Dispatcher:
    """
    Low-level client for the Mailchimp Marketing API.

    Handles:
    - Endpoint selection from the API key datacenter
    - Basic authentication with the API key
    - Query string composition and JSON bodies
    - Response classification, decoding and back-reference wiring
    - Cancellation and deadlines through a RequestContext

    The dispatcher keeps no per-call state, so one instance may be shared by
    concurrent callers. Calls made with a context run the exchange on a
    worker thread, so a cancel or deadline returns control to the caller
    while the server has not answered yet. The worker then closes the
    abandoned response.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str | None = None,
        debug: bool = False,
        http_client: httpx.Client | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the dispatcher.

        Args:
            api_key: Mailchimp API key
            endpoint: API base URL (derived from the key when omitted)
            debug: Log request and response bodies
            http_client: Optional httpx client (created if None)
            timeout_seconds: Default request timeout in seconds
        """
        if not api_key:
            raise ConfigError("An API key is required")

        self.api_key = api_key
        self.endpoint = (endpoint or endpoint_for_key(api_key)).rstrip("/")
        self.debug = debug
        self.timeout_seconds = timeout_seconds
        self._auth = httpx.BasicAuth(AUTH_USERNAME, api_key)

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client(timeout=timeout_seconds)
        else:
            self.http_client = http_client

        self._executor = ThreadPoolExecutor(thread_name_prefix="mailchimp-client")

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        # Abandoned exchanges finish on their own and close their responses
        self._executor.shutdown(wait=False)
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _build_url(self, path: str) -> str:
        """Join the endpoint and a relative path."""
        return f"{self.endpoint}/{path.lstrip('/')}"

    @staticmethod
    def _encode_body(body: Any) -> bytes:
        if body is None:
            return b""
        return json.dumps(to_dict(body)).encode("utf-8")

    def _read_body(self, response: httpx.Response, context: RequestContext) -> bytes:
        chunks = []
        try:
            context.check()
            for chunk in response.iter_bytes():
                context.check()
                chunks.append(chunk)
        except httpx.RequestError as e:
            raise TransportError(f"Failed reading response: {e}") from e
        return b"".join(chunks)

    def _exchange(
        self,
        request: httpx.Request,
        context: RequestContext,
    ) -> tuple[int, bytes]:
        """Send a request and read the whole body; the response is always closed."""
        try:
            response = self.http_client.send(request, auth=self._auth, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"{request.method} {request.url.path} failed: {e}") from e

        try:
            raw = self._read_body(response, context)
            return response.status_code, raw
        finally:
            response.close()

    def _exchange_interruptible(
        self,
        request: httpx.Request,
        context: RequestContext,
    ) -> tuple[int, bytes]:
        """
        Run the exchange on a worker and wait for it, the cancel or the deadline.

        Raises:
            TransportError: As soon as the context is cancelled or expires
        """
        finished = threading.Event()
        future = self._executor.submit(self._exchange, request, context)
        future.add_done_callback(lambda _: finished.set())
        unregister = context.on_cancel(finished.set)
        try:
            finished.wait(context.remaining())
        finally:
            unregister()

        if not future.done():
            logger.debug(f"{request.method} {request.url} abandoned before the response arrived")
            context.check()
            raise TransportError("Request deadline exceeded")

        return future.result()

    def request(
        self,
        method: str,
        path: str,
        params: QueryParams | dict[str, Any] | None = None,
        body: Any = None,
        response_type: Any = None,
        parents: dict[str, Any] | None = None,
        context: RequestContext | None = None,
    ) -> Any:
        """
        Execute one API call.

        Args:
            method: HTTP method
            path: Path relative to the endpoint (e.g., "/campaigns")
            params: Query parameter source
            body: Request body (dataclass, dict or list); None sends no body
            response_type: Dataclass or builtin type to decode the response into
            parents: Parent identity keys to set on the decoded entities
            context: Cancellation/deadline signal for this call

        Returns:
            The decoded response, with back-references attached, or None when
            no response_type was given. An empty 2xx body yields
            ``response_type()``.

        Raises:
            TransportError: If the exchange could not complete
            StructuredAPIError: On non-2xx with a problem-detail body
            RawHTTPError: On non-2xx with any other body
            DecodeError: If a 2xx body does not decode into response_type
        """
        # Without a caller context nothing can cancel the call
        interruptible = context is not None
        context = context or RequestContext()
        url = self._build_url(path)
        query = build_query(params)
        content = self._encode_body(body)

        extra: dict[str, Any] = {}
        remaining = context.remaining()
        if remaining is not None:
            extra["timeout"] = remaining

        context.check()

        request = self.http_client.build_request(
            method,
            url,
            params=query or None,
            content=content,
            headers={"Content-Type": "application/json"},
            **extra,
        )

        logger.debug(f"{method} {url} params={query}")
        if self.debug and content:
            logger.debug(f"Request body: {content.decode('utf-8')}")

        if interruptible:
            status_code, raw = self._exchange_interruptible(request, context)
        else:
            status_code, raw = self._exchange(request, context)

        logger.debug(f"{method} {url} -> {status_code} ({len(raw)} bytes)")
        if self.debug and raw:
            logger.debug(f"Response body: {truncate(raw.decode('utf-8', errors='replace'))}")

        outcome = classify(status_code, raw)
        if outcome.error is not None:
            raise outcome.error

        if response_type is None:
            return None

        if outcome.kind is Classification.EMPTY_SUCCESS:
            result = response_type()
        else:
            result = decode(response_type, raw, status_code)

        return wire(result, self, parents)

    def request_ok(
        self,
        method: str,
        path: str,
        context: RequestContext | None = None,
    ) -> tuple[bool, MailchimpError | None]:
        """
        Execute a call with no parameters, body or output.

        Returns:
            (True, None) on success, (False, error) on any failure
        """
        try:
            self.request(method, path, context=context)
        except MailchimpError as e:
            return False, e
        return True, None
