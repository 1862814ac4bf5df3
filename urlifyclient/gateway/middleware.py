"""Request/response middleware pipeline wrapped around the HTTP transport.

A Pipeline is an ordered list of request stages and response stages composed
around a single transport call:

    request ──> request stages ──> transport ──> response stages ──> response

    - request stage:  (httpx.Request) -> httpx.Request
    - response stage: (httpx.Response) -> httpx.Response, or raise

Two stages ship with the client:

    BearerTokenStage:
        Decorate each request with `Authorization: Bearer <token>`, reading
        the token from the SessionStore at call time.

    AuthorizationFailureStage:
        On HTTP 401 clear the session, navigate to the login entry point and
        raise AuthorizationError to the original caller.

Example:
    >>> pipeline = Pipeline(
    ...     request_stages=[BearerTokenStage(sessions)],
    ...     response_stages=[AuthorizationFailureStage(sessions, router)],
    ... )
    >>> response = await pipeline.send(request, client.send)
"""

import logging
from collections.abc import Iterable

import httpx

from urlifyclient.constants import Route
from urlifyclient.exceptions import AuthorizationError
from urlifyclient.session.session_store import SessionStore
from urlifyclient.types import Navigator, RequestStage, ResponseStage, Transport


logger = logging.getLogger(__name__)


def server_message(response: httpx.Response) -> str | None:
    """Extract the server-provided error message from a response, if any

    Example:
        >>> server_message(httpx.Response(400, json={'message': 'Invalid URL'}))
        'Invalid URL'
        >>> server_message(httpx.Response(500, text='boom')) is None
        True
    """
    try:
        body = response.json()
    except ValueError:
        return None
    message = body.get('message') if isinstance(body, dict) else None
    return message if isinstance(message, str) and message else None


class Pipeline:
    """Ordered request/response stages composed around a transport call"""

    def __init__(
        self,
        request_stages: Iterable[RequestStage] = (),
        response_stages: Iterable[ResponseStage] = (),
    ):
        self.request_stages: list[RequestStage] = list(request_stages)
        self.response_stages: list[ResponseStage] = list(response_stages)

    def prepare(self, request: httpx.Request) -> httpx.Request:
        for stage in self.request_stages:
            request = stage(request)
        return request

    def inspect(self, response: httpx.Response) -> httpx.Response:
        for stage in self.response_stages:
            response = stage(response)
        return response

    async def send(self, request: httpx.Request, transport: Transport) -> httpx.Response:
        response = await transport(self.prepare(request))
        return self.inspect(response)


class BearerTokenStage:
    """Attach the current session token to outgoing requests"""

    def __init__(self, session_store: SessionStore):
        self.session_store = session_store

    def __call__(self, request: httpx.Request) -> httpx.Request:
        token = self.session_store.token
        if token:
            request.headers['Authorization'] = f'Bearer {token}'
        return request


class AuthorizationFailureStage:
    """Reset the session and go to the login entry point on HTTP 401

    The session clear is idempotent: when several in-flight requests observe the
    failure, only the first one actually clears the session. Every one of them
    still raises AuthorizationError to its own caller.
    """

    def __init__(self, session_store: SessionStore, navigator: Navigator, login_path: str = Route.LOGIN):
        self.session_store = session_store
        self.navigator = navigator
        self.login_path = login_path

    def __call__(self, response: httpx.Response) -> httpx.Response:
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response

        cleared = self.session_store.logout()
        logger.warning(
            'Request rejected as unauthorized. Redirecting to login.',
            extra={'url': str(response.request.url), 'sessionCleared': cleared},
        )
        self.navigator.navigate(self.login_path)
        raise AuthorizationError(
            f'{response.request.method} {response.request.url.path} was rejected as unauthorized (HTTP 401)',
            status_code=response.status_code,
            server_message=server_message(response),
        )
