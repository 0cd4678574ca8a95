"""Unit tests for static asset classification and serving in assets.py."""

import pytest

from kvshortener.core.assets import AssetServer, cacheable, mime_type, needs_caching
from kvshortener.dao.memory import KeyValueMemoryDAO
from kvshortener.exceptions import NotFoundError
from kvshortener.settings import ShortenerSettings


@pytest.mark.parametrize(
    'path, expected',
    [
        ('/index.html', 'text/html'),
        ('/css/main.css', 'text/css'),
        ('/img/logo.png', 'image/png'),
        ('/10wBU', None),
        ('/new', None),
        ('/', None),
    ],
)
def test_mime_type(path, expected):
    assert mime_type(path) == expected


def test_mime_type_javascript():
    assert mime_type('/js/app.js') in {'text/javascript', 'application/javascript'}


@pytest.mark.parametrize(
    'url, expected',
    [
        ('https://sho.rt/css/main.css', True),
        ('https://sho.rt/img/logo.png?v=3', True),
        ('https://sho.rt/index.html', False),
        ('https://sho.rt/10wBU', False),
        ('https://sho.rt/', False),
        ('https://sho.rt:bad/css/main.css', False),
        ('', False),
        ('https://[::1/main.css', False),
    ],
)
def test_needs_caching(url, expected):
    assert needs_caching(url) is expected


@pytest.mark.parametrize('mime, expected', [('text/css', True), ('image/png', True), ('text/html', False), (None, False)])
def test_cacheable(mime, expected):
    assert cacheable(mime) is expected


@pytest.mark.asyncio
@pytest.mark.parametrize('path', ['/index.html', '/css/main.css'])
async def test_serve_agrees_with_needs_caching(memory_dao: KeyValueMemoryDAO, settings: ShortenerSettings, path):
    response = await AssetServer(memory_dao, settings).serve(path, mime_type(path))
    assert ('Cache-Control' in response.headers) is needs_caching(f'https://sho.rt{path}')


@pytest.mark.asyncio
async def test_serve_cacheable_asset(memory_dao: KeyValueMemoryDAO, settings: ShortenerSettings):
    response = await AssetServer(memory_dao, settings).serve('/css/main.css', 'text/css')

    assert response.status == 200
    assert response.headers == {'Content-Type': 'text/css', 'Cache-Control': 'max-age=14400'}
    assert response.body == 'body { margin: 0; }'


@pytest.mark.asyncio
async def test_serve_html_without_cache_control(memory_dao: KeyValueMemoryDAO, settings: ShortenerSettings):
    response = await AssetServer(memory_dao, settings).serve('/index.html', 'text/html')

    assert response.headers == {'Content-Type': 'text/html'}
    assert response.body == '<html>home</html>'


@pytest.mark.asyncio
async def test_serve_custom_cache_control(memory_dao: KeyValueMemoryDAO):
    response = await AssetServer(memory_dao, ShortenerSettings(cache_control='no-cache')).serve('/css/main.css', 'text/css')
    assert response.headers['Cache-Control'] == 'no-cache'


@pytest.mark.asyncio
async def test_serve_missing_asset(memory_dao: KeyValueMemoryDAO, settings: ShortenerSettings):
    with pytest.raises(NotFoundError):
        await AssetServer(memory_dao, settings).serve('/missing.css', 'text/css')


@pytest.mark.asyncio
async def test_serve_keeps_leading_slash(memory_dao: KeyValueMemoryDAO, settings: ShortenerSettings):
    with pytest.raises(NotFoundError):
        await AssetServer(memory_dao, settings).serve('css/main.css', 'text/css')
