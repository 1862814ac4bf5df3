from urlifyclient.utils.config import app_env, app_name, app_prefix, api_base_url, app_origin, load_config
from urlifyclient.utils.helpers import get_short_url, backend_root, expiry_hours, require_environment
from urlifyclient.utils.logging import initialize_logging
from urlifyclient.utils.validators import validate_url


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'api_base_url',
    'app_origin',
    'load_config',
    'get_short_url',
    'backend_root',
    'expiry_hours',
    'require_environment',
    'initialize_logging',
    'validate_url',
]
