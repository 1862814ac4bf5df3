from urlifyclient.routing.access_guard import AccessGuard
from urlifyclient.routing.router import Navigation, Router


__all__ = ['AccessGuard', 'Navigation', 'Router']
