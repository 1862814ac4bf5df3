"""Single entry point for every call to the remote URL shortener API.

REST contract consumed (relative to the API base URL):

    POST   /auth/login       {email, password}          -> {token, user}
    POST   /auth/register    {username, email, password} -> {token, user}
    POST   /urls/shorten     {url, expiryHours|null}     -> UrlRecord
    GET    /urls/my-urls     ?page&size                  -> Page<UrlRecord>
    DELETE /urls/{shortCode}                             -> acknowledgement
    GET    /analytics/{shortCode}                        -> AnalyticsRecord
    GET    /analytics/all                                -> AnalyticsRecord[]

Every request flows through the middleware Pipeline (bearer token, 401
handling). The gateway doesn't retry, rate-limit or deduplicate requests.

Error mapping:
    HTTP 401                 -> AuthorizationError (after session reset + redirect)
    other non-2xx            -> ResourceError(status code, server message)
    network failure          -> TransportError
    undecodable/invalid body -> MalformedResponseError

Example:
    >>> async with ApiGateway(sessions, router, base_url='https://api.example.com/api') as gateway:
    ...     session = await gateway.authenticate('jane@example.com', 's3cret')
    ...     sessions.login(session.token, session.user)
    ...     page = await gateway.list_urls(page=0, size=10)
"""

import logging
from typing import Any

import httpx

from urlifyclient.constants import Defaults
from urlifyclient.exceptions import MalformedResponseError, ResourceError, TransportError
from urlifyclient.gateway.middleware import AuthorizationFailureStage, BearerTokenStage, Pipeline, server_message
from urlifyclient.models import AnalyticsRecord, Page, Session, UrlRecord
from urlifyclient.session.session_store import SessionStore
from urlifyclient.types import Navigator


logger = logging.getLogger(__name__)


class ApiGateway:
    def __init__(
        self,
        session_store: SessionStore,
        navigator: Navigator,
        base_url: str = Defaults.API_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = Defaults.REQUEST_TIMEOUT,
    ):
        """Initialize the gateway

        Args:
            session_store (SessionStore):
                Source of the bearer token; reset on authorization failures.

            navigator (Navigator):
                Used to force navigation to the login entry point on HTTP 401.

            base_url (str):
                Remote API base URL. Ignored when `client` is given.

            client (httpx.AsyncClient | None):
                Pre-initialized HTTP client. If None, a new client is created.

            timeout (float):
                Request timeout in seconds. Ignored when `client` is given.
        """
        if client is None:
            client = httpx.AsyncClient(
                base_url=base_url,
                timeout=timeout,
                headers={'Content-Type': 'application/json', 'Accept': 'application/json'},
            )

        self.client = client
        self.session_store = session_store
        self.pipeline = Pipeline(
            request_stages=[BearerTokenStage(session_store)],
            response_stages=[AuthorizationFailureStage(session_store, navigator)],
        )

    async def __aenter__(self) -> 'ApiGateway':
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # -------------------------------
    # Auth
    # -------------------------------

    async def authenticate(self, email: str, password: str) -> Session:
        response = await self.request('POST', '/auth/login', json={'email': email, 'password': password})
        return Session.from_json(self._json(response))

    async def register(self, username: str, email: str, password: str) -> Session:
        body = {'username': username, 'email': email, 'password': password}
        response = await self.request('POST', '/auth/register', json=body)
        return Session.from_json(self._json(response))

    # -------------------------------
    # URLs
    # -------------------------------

    async def create_short_url(self, long_url: str, expiry_hours: int | None = None) -> UrlRecord:
        response = await self.request('POST', '/urls/shorten', json={'url': long_url, 'expiryHours': expiry_hours})
        return UrlRecord.from_json(self._json(response))

    async def list_urls(self, page: int = 0, size: int = Defaults.PAGE_SIZE) -> Page[UrlRecord]:
        response = await self.request('GET', '/urls/my-urls', params={'page': page, 'size': size})
        return Page.from_json(self._json(response), UrlRecord.from_json)

    async def delete_url(self, short_code: str) -> str:
        """Delete a short URL and return the server's acknowledgement message"""
        response = await self.request('DELETE', f'/urls/{short_code}')
        self._raise_for_status(response)
        return server_message(response) or response.text

    # -------------------------------
    # Analytics
    # -------------------------------

    async def fetch_analytics(self, short_code: str) -> AnalyticsRecord:
        response = await self.request('GET', f'/analytics/{short_code}')
        return AnalyticsRecord.from_json(self._json(response))

    async def fetch_all_analytics(self) -> list[AnalyticsRecord]:
        response = await self.request('GET', '/analytics/all')
        body = self._json(response)
        if not isinstance(body, list):
            raise MalformedResponseError(f'Expected a list of analytics records (given type: {type(body).__name__}).')
        return [AnalyticsRecord.from_json(item) for item in body]

    # -------------------------------
    # Plumbing
    # -------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request through the middleware pipeline

        Raises:
            AuthorizationError:
                If the server answers HTTP 401.
            TransportError:
                If the server can't be reached.
        """
        request = self.client.build_request(method, path, **kwargs)
        try:
            response = await self.pipeline.send(request, self.client.send)
        except httpx.TransportError as e:
            logger.warning('Transport failure.', extra={'method': method, 'path': path, 'error': repr(e)})
            raise TransportError(f'Unable to reach the server ({type(e).__name__}).') from e

        logger.debug('API request completed.', extra={'method': method, 'path': path, 'status': response.status_code})
        return response

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        request = response.request
        raise ResourceError(
            f'{request.method} {request.url.path} failed (HTTP {response.status_code})',
            status_code=response.status_code,
            server_message=server_message(response),
        )

    def _json(self, response: httpx.Response) -> Any:
        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError('Server responded with invalid JSON.', status_code=response.status_code) from e
