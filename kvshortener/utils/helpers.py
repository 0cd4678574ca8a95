"""Helper utilities for AWS lambda functions.

Functions:
    now_millis() -> int
        Current Unix time in epoch milliseconds
    request_host(event) -> str
        Extract the public host name from an API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn any unhandled exception into a structured 500 response

Example:
    >>> from kvshortener.utils.helpers import request_host
    >>> request_host({'headers': {'Host': 'sho.rt'}})
    'sho.rt'
    >>> request_host({'requestContext': {'domainName': 'abc123.execute-api.us-east-1.amazonaws.com'}})
    'abc123.execute-api.us-east-1.amazonaws.com'
    >>> request_host({})
    'localhost:3000'
"""

import os
import json
import time
import functools
import logging
from typing import Any
from collections.abc import Callable

from kvshortener.exceptions import MissingEnvironmentVariableError, ServerError
from kvshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def now_millis() -> int:
    return int(time.time() * 1000)


def request_host(event: dict[str, Any]) -> str:
    """Extract the public host name for the current Lambda invocation

    Prefers the `Host` header (custom domains behind CloudFront keep it),
    falls back to the API Gateway domain name and finally to the SAM CLI
    default for local invocations.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Host name, e.g. "sho.rt" or "localhost:3000"
    """
    headers = event.get('headers') or {}
    for name, value in headers.items():
        if name.lower() == 'host' and value:
            return value

    domain = (event.get('requestContext') or {}).get('domainName', '')
    return domain or 'localhost:3000'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with a structured 500 instead of crashing the Lambda

    When running locally (SAM, tests with APP_ENV=local) the original
    exception is re-raised so it shows up with a full traceback.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            error = ServerError()
            return {
                'statusCode': error.status,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(error.to_dict()),
            }

    return wrapper
