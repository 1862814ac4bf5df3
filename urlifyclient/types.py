from typing import Any, Protocol, TYPE_CHECKING
from collections.abc import Awaitable, Callable

import httpx

if TYPE_CHECKING:
    from urlifyclient.models import Session


# Type aliases for Python dictionaries
type JsonObject = dict[str, Any]
type ClientConfig = dict[str, Any]

# Type aliases for the gateway middleware pipeline
type RequestStage = Callable[[httpx.Request], httpx.Request]
type ResponseStage = Callable[[httpx.Response], httpx.Response]
type Transport = Callable[[httpx.Request], Awaitable[httpx.Response]]

# Type aliases for collaborator callbacks
type SessionListener = Callable[[Session | None], None]
type Confirm = Callable[[str], bool]


class Navigator(Protocol):
    """Anything able to move the application to another location."""

    def navigate(self, path: str) -> Any: ...


class Notifier(Protocol):
    """Anything able to present a transient user-visible notification."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
