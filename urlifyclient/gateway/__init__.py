from urlifyclient.gateway.api_gateway import ApiGateway
from urlifyclient.gateway.middleware import Pipeline, BearerTokenStage, AuthorizationFailureStage, server_message


__all__ = [
    'ApiGateway',
    'Pipeline',
    'BearerTokenStage',
    'AuthorizationFailureStage',
    'server_message',
]
