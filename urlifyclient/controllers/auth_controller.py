import logging

from urlifyclient.constants import Route
from urlifyclient.exceptions import AuthorizationError, GatewayError
from urlifyclient.gateway.api_gateway import ApiGateway
from urlifyclient.models import Session
from urlifyclient.session.session_store import SessionStore
from urlifyclient.store.exceptions import StoreError
from urlifyclient.types import Navigator, Notifier


logger = logging.getLogger(__name__)

LOGIN_FAILED = 'Login failed'
INVALID_CREDENTIALS = 'Invalid email or password'
REGISTRATION_FAILED = 'Registration failed'
SESSION_NOT_SAVED = 'Signed in, but the session could not be saved'


class AuthController:
    """Login, registration and logout flows

    On success the new session is handed to the SessionStore (the only place a
    session is ever stored) and the user is taken to the dashboard.
    """

    def __init__(self, gateway: ApiGateway, session_store: SessionStore, navigator: Navigator, notifier: Notifier):
        self.gateway = gateway
        self.session_store = session_store
        self.navigator = navigator
        self.notifier = notifier

    async def login(self, email: str, password: str) -> Session | None:
        try:
            session = await self.gateway.authenticate(email, password)
        except AuthorizationError as e:
            # The gateway has already reset the session and shown the login view
            self.notifier.error(e.server_message or INVALID_CREDENTIALS)
            return None
        except GatewayError as e:
            logger.warning('Login failed.', extra={'statusCode': e.status_code, 'errorCode': e.error_code})
            self.notifier.error(e.server_message or LOGIN_FAILED)
            return None
        return self._start(session)

    async def register(self, username: str, email: str, password: str) -> Session | None:
        try:
            session = await self.gateway.register(username, email, password)
        except GatewayError as e:
            logger.warning('Registration failed.', extra={'statusCode': e.status_code, 'errorCode': e.error_code})
            self.notifier.error(e.server_message or REGISTRATION_FAILED)
            return None
        return self._start(session)

    def logout(self) -> None:
        self.session_store.logout()
        self.navigator.navigate(Route.LOGIN)

    def _start(self, session: Session) -> Session | None:
        try:
            session = self.session_store.login(session.token, session.user)
        except StoreError:
            logger.exception('Failed to persist the new session.', extra={'userId': session.user.id})
            self.notifier.error(SESSION_NOT_SAVED)
            return None
        self.navigator.navigate(Route.DASHBOARD)
        return session
