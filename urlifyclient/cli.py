"""Command-line shell for the URL shortener client.

Usage:
    urlify login <email> [--password PASSWORD]
    urlify register <username> <email> [--password PASSWORD]
    urlify logout
    urlify whoami
    urlify shorten <url> [--expires 2025-12-31T18:00]
    urlify list [--page N]
    urlify delete <short_code> [--yes]
    urlify analytics [<short_code>]
    urlify open <path>

Results are printed as JSON on stdout; notifications and logs go to stderr.

Exit codes:
    0  success
    1  the operation failed
    2  not logged in (or the session was rejected by the server)
"""

import sys
import json
import asyncio
import getpass
import argparse
from datetime import datetime
from typing import Any

from urlifyclient.app import Application, build_app
from urlifyclient.constants import Route
from urlifyclient.exceptions import ConfigurationError
from urlifyclient.models import AnalyticsRecord, UrlRecord
from urlifyclient.notifications import Notification
from urlifyclient.store.exceptions import StoreError
from urlifyclient.utils import initialize_logging


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNAUTHENTICATED = 2


def _timestamp(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def url_to_json(record: UrlRecord, short_url: str) -> dict[str, Any]:
    return {
        'shortCode': record.short_code,
        'shortUrl': short_url,
        'originalUrl': record.original_url,
        'clicks': record.clicks,
        'createdAt': _timestamp(record.created_at),
        'expiresAt': _timestamp(record.expires_at),
    }


def analytics_to_json(record: AnalyticsRecord, series: list) -> dict[str, Any]:
    return {
        'shortCode': record.short_code,
        'originalUrl': record.original_url,
        'totalClicks': record.total_clicks,
        'createdAt': _timestamp(record.created_at),
        'expiresAt': _timestamp(record.expires_at),
        'daily': [{'date': bucket.date.isoformat(), 'clicks': bucket.count} for bucket in series] or None,
    }


def confirm_on_tty(message: str) -> bool:
    try:
        answer = input(f'{message} [y/N] ')
    except EOFError:
        return False
    return answer.strip().lower() in {'y', 'yes'}


class UrlifyCLI:
    """Command-line interface for the URL shortener client."""

    def __init__(self, app: Application):
        self.app = app
        app.notifications.subscribe(self._print_notification)

    @staticmethod
    def _print_notification(notification: Notification) -> None:
        print(f'[{notification.level}] {notification.message}', file=sys.stderr)

    @staticmethod
    def _emit(payload: Any) -> None:
        print(json.dumps(payload, indent=2))

    def _enter(self, view: str) -> bool:
        """Navigate to a view; False if the guard sent us to the login entry point instead"""
        navigation = self.app.router.navigate(view)
        if navigation.view != view:
            print(f'Not logged in. Run `urlify login` first (redirected to {navigation.path}).', file=sys.stderr)
            return False
        return True

    def _rejected(self) -> bool:
        current = self.app.router.current
        return current is not None and current.view == Route.LOGIN and not self.app.sessions.is_authenticated

    # -------------------------------
    # Auth
    # -------------------------------

    async def login(self, email: str, password: str) -> int:
        session = await self.app.auth.login(email, password)
        if session is None:
            return EXIT_FAILURE
        self._emit({'success': True, 'user': session.user.to_json()})
        return EXIT_OK

    async def register(self, username: str, email: str, password: str) -> int:
        session = await self.app.auth.register(username, email, password)
        if session is None:
            return EXIT_FAILURE
        self._emit({'success': True, 'user': session.user.to_json()})
        return EXIT_OK

    async def logout(self) -> int:
        self.app.auth.logout()
        self._emit({'success': True})
        return EXIT_OK

    async def whoami(self) -> int:
        user = self.app.sessions.user
        if user is None:
            self._emit({'authenticated': False})
            return EXIT_UNAUTHENTICATED
        self._emit({'authenticated': True, 'user': user.to_json()})
        return EXIT_OK

    # -------------------------------
    # URLs
    # -------------------------------

    async def shorten(self, url: str, expires: datetime | None) -> int:
        if not self._enter(Route.DASHBOARD):
            return EXIT_UNAUTHENTICATED

        short_url = await self.app.urls.create(url, expires)
        if short_url is None:
            if self.app.urls.form_error:
                print(self.app.urls.form_error, file=sys.stderr)
            return EXIT_UNAUTHENTICATED if self._rejected() else EXIT_FAILURE
        self._emit({'success': True, 'shortUrl': short_url})
        return EXIT_OK

    async def list_urls(self, page: int) -> int:
        if not self._enter(Route.URLS):
            return EXIT_UNAUTHENTICATED

        if not await self.app.urls.load_page(page):
            return EXIT_UNAUTHENTICATED if self._rejected() else EXIT_FAILURE

        state = self.app.urls.state
        self._emit(
            {
                'page': state.page,
                'totalPages': state.total_pages,
                'totalElements': state.total_elements,
                'urls': [url_to_json(record, self.app.urls.short_url(record.short_code)) for record in state.urls],
            }
        )
        return EXIT_OK

    async def delete(self, short_code: str) -> int:
        if not self._enter(Route.URLS):
            return EXIT_UNAUTHENTICATED

        if not await self.app.urls.delete(short_code):
            return EXIT_UNAUTHENTICATED if self._rejected() else EXIT_FAILURE
        self._emit({'success': True, 'shortCode': short_code})
        return EXIT_OK

    # -------------------------------
    # Analytics
    # -------------------------------

    async def analytics(self, short_code: str | None) -> int:
        if not self._enter(Route.ANALYTICS):
            return EXIT_UNAUTHENTICATED

        controller = self.app.analytics
        if short_code is not None:
            record = await controller.load_one(short_code)
            if record is None:
                return EXIT_UNAUTHENTICATED if self._rejected() else EXIT_FAILURE
            self._emit(analytics_to_json(record, controller.series(record)))
            return EXIT_OK

        records = await controller.load()
        if self._rejected():
            return EXIT_UNAUTHENTICATED
        summary = controller.summary
        self._emit(
            {
                'totalUrls': summary.total_urls,
                'totalClicks': summary.total_clicks,
                'averageClicks': summary.average_clicks,
                'urls': [analytics_to_json(record, controller.series(record)) for record in records],
            }
        )
        return EXIT_OK

    # -------------------------------
    # Routing
    # -------------------------------

    async def open(self, path: str) -> int:
        navigation = self.app.router.navigate(path)
        self._emit(
            {
                'requested': navigation.requested,
                'path': navigation.path,
                'view': navigation.view,
                'externalUrl': navigation.external_url,
                'redirected': navigation.redirected,
            }
        )
        return EXIT_OK if navigation.found else EXIT_FAILURE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='urlify', description='URL shortener client')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    login = commands.add_parser('login', help='Sign in')
    login.add_argument('email')
    login.add_argument('--password', help='Prompted for if omitted')

    register = commands.add_parser('register', help='Create an account and sign in')
    register.add_argument('username')
    register.add_argument('email')
    register.add_argument('--password', help='Prompted for if omitted')

    commands.add_parser('logout', help='Sign out')
    commands.add_parser('whoami', help='Show the signed-in user')

    shorten = commands.add_parser('shorten', help='Create a short URL')
    shorten.add_argument('url')
    shorten.add_argument('--expires', type=datetime.fromisoformat, help='Absolute expiry, e.g. 2025-12-31T18:00')

    listing = commands.add_parser('list', help='List your short URLs')
    listing.add_argument('--page', type=int, default=1, help='One-based page number')

    delete = commands.add_parser('delete', help='Delete a short URL')
    delete.add_argument('short_code')
    delete.add_argument('-y', '--yes', action='store_true', help='Skip the confirmation prompt')

    analytics = commands.add_parser('analytics', help='Show click analytics')
    analytics.add_argument('short_code', nargs='?')

    resolve = commands.add_parser('open', help='Resolve an application path')
    resolve.add_argument('path')

    return parser


async def run(args: argparse.Namespace, app: Application) -> int:
    cli = UrlifyCLI(app)
    async with app:
        match args.command:
            case 'login':
                return await cli.login(args.email, args.password or getpass.getpass('Password: '))
            case 'register':
                return await cli.register(args.username, args.email, args.password or getpass.getpass('Password: '))
            case 'logout':
                return await cli.logout()
            case 'whoami':
                return await cli.whoami()
            case 'shorten':
                return await cli.shorten(args.url, args.expires)
            case 'list':
                return await cli.list_urls(max(0, args.page - 1))
            case 'delete':
                return await cli.delete(args.short_code)
            case 'analytics':
                return await cli.analytics(args.short_code)
            case 'open':
                return await cli.open(args.path)
    return EXIT_FAILURE  # pragma: no cover


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    initialize_logging('DEBUG' if args.verbose else None)

    confirm = (lambda message: True) if getattr(args, 'yes', False) else confirm_on_tty
    try:
        app = build_app(confirm=confirm)
    except (ConfigurationError, StoreError) as e:
        print(f'Configuration error: {e}', file=sys.stderr)
        return EXIT_FAILURE

    return asyncio.run(run(args, app))


if __name__ == '__main__':
    sys.exit(main())
