"""Unit tests for the NotificationCenter.

Test coverage includes:
    1. Publishing
       - success() and error() record notifications in order.
       - History is bounded.
    2. Subscribers
       - Listeners receive every notification until they unsubscribe.
"""

from unittest.mock import MagicMock

from urlifyclient.notifications import Level, Notification, NotificationCenter


# -------------------------------
# 1. Publishing
# -------------------------------


def test_publish(notifier):
    notifier.success('Short URL created successfully!')
    notifier.error('Failed to fetch URLs')

    assert list(notifier.history) == [
        Notification(message='Short URL created successfully!', level=Level.SUCCESS),
        Notification(message='Failed to fetch URLs', level=Level.ERROR),
    ]
    assert notifier.latest.message == 'Failed to fetch URLs'


def test_latest_when_empty(notifier):
    assert notifier.latest is None


def test_history_is_bounded():
    center = NotificationCenter(maxlen=2)
    for i in range(3):
        center.error(f'error {i}')

    assert [n.message for n in center.history] == ['error 1', 'error 2']


# -------------------------------
# 2. Subscribers
# -------------------------------


def test_subscribe_and_unsubscribe(notifier):
    listener = MagicMock()
    unsubscribe = notifier.subscribe(listener)

    notifier.success('one')
    unsubscribe()
    notifier.success('two')

    listener.assert_called_once_with(Notification(message='one', level=Level.SUCCESS))
