from urlifyclient.controllers.auth_controller import AuthController
from urlifyclient.controllers.url_resource_controller import UrlListState, UrlResourceController


__all__ = ['AuthController', 'UrlListState', 'UrlResourceController']
