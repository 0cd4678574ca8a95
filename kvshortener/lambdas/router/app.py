import asyncio
import base64
import binascii
import logging

from kvshortener.types import LambdaEvent, LambdaContext, LambdaResponse, LambdaConfiguration
from kvshortener.core.http import Request, Response, error_response
from kvshortener.core.router import RequestRouter
from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.dao.memory import KeyValueMemoryDAO
from kvshortener.dao.redis import KeyValueRedisDAO
from kvshortener.exceptions import BadConfigurationError, DeserializationError, ShortenerError
from kvshortener.settings import ShortenerSettings
from kvshortener.utils import load_config, app_prefix, request_host
from kvshortener.utils.helpers import guarantee_500_response
from kvshortener.lambdas.router.constants import (
    CLIENT_ERROR,
    SERVER_ERROR,
    REQUEST_HANDLED,
    MALFORMED_EVENT,
    UNKNOWN_BACKEND,
)


logger = logging.getLogger(__name__)

# The memory backend must outlive single invocations to be of any use
_memory_dao: KeyValueMemoryDAO | None = None


def memory_dao(memory_config: dict) -> KeyValueMemoryDAO:
    """Return the process-wide memory DAO, seeding its assets on first use

    Config example:
        {"assets": {"/index.html": "<html>...</html>"}}
    """
    global _memory_dao
    if _memory_dao is None:
        assets = memory_config.get('assets') or {}
        _memory_dao = KeyValueMemoryDAO({(Namespace.ASSETS, path): content for path, content in assets.items()})
    return _memory_dao


def build_dao(config: LambdaConfiguration) -> KeyValueBaseDAO:
    """Create the data store selected by the configuration's active backend

    Raises:
        BadConfigurationError: If the backend is unknown.
    """
    backend = config.get('backend')
    match backend:
        case 'redis':
            redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
            return KeyValueRedisDAO(**redis_config, prefix=app_prefix())
        case 'memory':
            return memory_dao(config.get('memory') or {})
        case _:
            logger.error('Unknown data store backend %r.', backend, extra={'event': UNKNOWN_BACKEND})
            raise BadConfigurationError(f'Unknown data store backend: {backend!r}')


def build_request(event: LambdaEvent) -> Request:
    """Translate an API Gateway proxy event into a Request

    Raises:
        DeserializationError: If a base64-encoded body can't be decoded.
    """
    body = event.get('body')
    if body is not None and event.get('isBase64Encoded'):
        try:
            body = base64.b64decode(body, validate=True).decode('utf-8')
        except (binascii.Error, ValueError) as e:
            logger.info('Failed to decode base64 request body.', extra={'event': MALFORMED_EVENT})
            raise DeserializationError('request body is not valid base64-encoded UTF-8') from e

    path = event.get('path') or '/'
    return Request(
        method=event.get('httpMethod') or 'GET',
        url=f'https://{request_host(event)}{path}',
        headers=dict(event.get('headers') or {}),
        body=body,
    )


def to_proxy_response(response: Response) -> LambdaResponse:
    return {
        'statusCode': response.status,
        'headers': dict(response.headers),
        'body': response.body,
    }


def render_error(error: ShortenerError) -> Response:
    if error.status >= 500:
        logger.error(
            'Request failed with a server error. Responding with %s.',
            error.status,
            exc_info=error,
            extra={'event': SERVER_ERROR, 'error_code': int(error.error_code), 'reason': error.message},
        )
    else:
        logger.info(
            'Request rejected. Responding with %s.',
            error.status,
            extra={'event': CLIENT_ERROR, 'error_code': int(error.error_code), 'reason': error.message},
        )
    return error_response(error)


async def dispatch(event: LambdaEvent, config: LambdaConfiguration) -> Response:
    settings = ShortenerSettings.from_mapping(config.get('policy'))
    request = build_request(event)

    dao = build_dao(config)
    try:
        response = await RequestRouter(dao, settings).handle(request)
    finally:
        await dao.aclose()

    logger.info(
        'Responding with %s.',
        response.status,
        extra={'event': REQUEST_HANDLED, 'method': request.method, 'path': event.get('path')},
    )
    return response


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle every API Gateway request of the shortener

    This Lambda handler follows this procedure:
    - Step 1: Load the router's configuration and policy
    - Step 2: Build the request and the data store
    - Step 3: Route the request (asset, create, resolve)
    - Step 4: Translate the response (or error) to API Gateway's format

    HTTP responses:
        200: Static asset, or newly created short URL
            short_url: host + '/' + short identifier
            raw_url: original url (provided in request)
        302: Redirect to the short URL's destination
            headers:
                Location: destination URL
        400: Malformed body, invalid URL or TTL too small
        401: TTL requires an API key
        404: Unknown short URL, asset or route
        415: Wrong method on the creation endpoint
        500: Internal server error

    Every error body has the form {"message": str, "status": int, "error_code": int}.

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'httpMethod': 'GET', 'path': '/2Lx9QbA', 'headers': {'Host': 'sho.rt'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    try:
        config = load_config('router')
        response = asyncio.run(dispatch(event, config))
    except ShortenerError as error:
        response = render_error(error)

    return to_proxy_response(response)
