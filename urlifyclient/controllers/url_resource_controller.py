"""State machine behind the "create short URL" form and the "my URLs" listing.

Operations:
    create(raw_url, expiry=None) -> str | None
        Validate the long URL, convert the optional absolute expiry into whole
        hours from now and ask the API for a short URL.

    load_page(page) / refresh() / next_page() / previous_page()
        Fetch one page of the user's URLs (page size 10). Every page change is a
        fresh full-page fetch; other pages are never cached.

    delete(short_code) -> bool
        Ask for explicit confirmation, delete, then re-fetch the current page.

Failure policy:
    - Invalid input is reported inline through `form_error`; the API is not called.
    - API failures become an error notification carrying the server message
      (or a fallback), and leave the previous state untouched.
    - AuthorizationError is handled globally by the gateway (session reset and
      redirect); it is not notified a second time.

Out-of-order responses:
    Each listing fetch takes a ticket. Only the response holding the latest
    ticket may update the listing; late responses for superseded requests
    are dropped.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from collections.abc import Callable

from urlifyclient.constants import Defaults
from urlifyclient.exceptions import AuthorizationError, GatewayError, ValidationError
from urlifyclient.gateway.api_gateway import ApiGateway
from urlifyclient.models import UrlRecord
from urlifyclient.types import Confirm, Notifier
from urlifyclient.utils.helpers import expiry_hours, get_short_url
from urlifyclient.utils.validators import validate_url


logger = logging.getLogger(__name__)

CREATE_FAILED = 'Failed to create short URL'
FETCH_FAILED = 'Failed to fetch URLs'
DELETE_FAILED = 'Failed to delete URL'
DELETE_PROMPT = 'Are you sure you want to delete this URL?'


# fmt: off
@dataclass
class UrlListState:
    page: int = 0                       # Zero-based index of the displayed page
    total_pages: int = 0                # As reported by the latest response
    total_elements: int = 0
    urls: list[UrlRecord] = field(default_factory=list)
    loading: bool = False
# fmt: on


def _refuse(message: str) -> bool:
    logger.debug('No confirmation handler configured. Refusing.', extra={'prompt': message})
    return False


class UrlResourceController:
    def __init__(
        self,
        gateway: ApiGateway,
        notifier: Notifier,
        origin: str,
        confirm: Confirm = _refuse,
        page_size: int = Defaults.PAGE_SIZE,
        clock: Callable[[], datetime] | None = None,
    ):
        self.gateway = gateway
        self.notifier = notifier
        self.origin = origin
        self.confirm = confirm
        self.page_size = page_size
        self.clock = clock

        self.state = UrlListState()
        self.form_error: str | None = None
        self.last_short_url: str | None = None
        self._ticket = 0

    def short_url(self, short_code: str) -> str:
        return get_short_url(short_code, self.origin)

    # -------------------------------
    # Create
    # -------------------------------

    async def create(self, raw_url: str, expiry: datetime | None = None) -> str | None:
        """Shorten a URL

        Args:
            raw_url (str):
                Long URL as typed by the user.
            expiry (datetime | None):
                Optional absolute expiry. Naive values are local time.

        Returns:
            str | None: The absolute short URL, or None if nothing was created.
        """
        self.form_error = None
        try:
            long_url = validate_url(raw_url)
        except ValidationError as e:
            self.form_error = str(e)
            return None

        hours = None
        if expiry is not None:
            now = self.clock() if self.clock is not None else None
            hours = expiry_hours(expiry, now=now)

        try:
            record = await self.gateway.create_short_url(long_url, hours)
        except GatewayError as e:
            self._report(e, CREATE_FAILED, action='create')
            return None

        self.last_short_url = self.short_url(record.short_code)
        logger.info('Short URL created.', extra={'shortcode': record.short_code, 'expiryHours': hours})
        self.notifier.success('Short URL created successfully!')
        return self.last_short_url

    # -------------------------------
    # List
    # -------------------------------

    async def load_page(self, page: int) -> bool:
        """Fetch one page and display it, unless a newer fetch superseded it

        Returns:
            bool: True if this response was applied to the listing.
        """
        page = max(0, page)
        self._ticket += 1
        ticket = self._ticket
        self.state.loading = True

        try:
            result = await self.gateway.list_urls(page=page, size=self.page_size)
        except GatewayError as e:
            if ticket != self._ticket:
                logger.debug('Dropping failure of a superseded page fetch.', extra={'page': page})
                return False
            self.state.loading = False
            self._report(e, FETCH_FAILED, action='list')
            return False

        if ticket != self._ticket:
            logger.debug('Dropping stale page response.', extra={'page': page, 'ticket': ticket, 'latest': self._ticket})
            return False

        self.state = UrlListState(
            page=page,
            total_pages=result.total_pages,
            total_elements=result.total_elements,
            urls=list(result.content),
            loading=False,
        )
        if not result.content and 0 < result.total_pages <= page:
            # The page emptied under us (e.g. after a deletion); step back to the last one
            return await self.load_page(result.total_pages - 1)
        return True

    async def refresh(self) -> bool:
        return await self.load_page(self.state.page)

    async def next_page(self) -> bool:
        last = max(0, self.state.total_pages - 1)
        return await self.load_page(min(last, self.state.page + 1))

    async def previous_page(self) -> bool:
        return await self.load_page(max(0, self.state.page - 1))

    # -------------------------------
    # Delete
    # -------------------------------

    async def delete(self, short_code: str) -> bool:
        """Delete a short URL after explicit confirmation

        Returns:
            bool: True if the URL was deleted.
        """
        if not self.confirm(DELETE_PROMPT):
            logger.debug('Deletion not confirmed.', extra={'shortcode': short_code})
            return False

        try:
            await self.gateway.delete_url(short_code)
        except GatewayError as e:
            self._report(e, DELETE_FAILED, action='delete')
            return False

        logger.info('Short URL deleted.', extra={'shortcode': short_code})
        self.notifier.success('URL deleted successfully')
        await self.refresh()
        return True

    def _report(self, error: GatewayError, fallback: str, action: str) -> None:
        if isinstance(error, AuthorizationError):
            logger.info('Authorization failure during %s. Handled by the gateway.', action)
            return
        logger.warning(
            'Short URL %s failed.',
            action,
            extra={'statusCode': error.status_code, 'errorCode': error.error_code},
        )
        self.notifier.error(error.server_message or fallback)
