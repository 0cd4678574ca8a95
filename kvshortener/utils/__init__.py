from kvshortener.utils.config import app_env, app_name, app_prefix, load_config
from kvshortener.utils.helpers import now_millis, request_host, require_environment, guarantee_500_response
from kvshortener.utils.shortener import encode, decode, generate_short_id
from kvshortener.utils.logging import initialize_logging


__all__ = [
    'encode',
    'decode',
    'generate_short_id',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'now_millis',
    'request_host',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
