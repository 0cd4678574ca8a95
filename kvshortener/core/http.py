"""Transport-agnostic request/response types

The router works on these plain objects; transports (the Lambda proxy
integration, tests) translate to and from their own representations.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from kvshortener.exceptions import ShortenerError


JSON_CONTENT_TYPE = 'application/json'


@dataclass(frozen=True)
class Request:
    method: str
    url: str  # absolute URL, e.g. https://sho.rt/new
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup"""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None


@dataclass(frozen=True)
class Response:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ''

    def json(self) -> Any:
        return json.loads(self.body)


def json_response(payload: dict[str, Any], status: int = 200) -> Response:
    return Response(status=status, headers={'Content-Type': JSON_CONTENT_TYPE}, body=json.dumps(payload))


def error_response(error: ShortenerError) -> Response:
    return json_response(error.to_dict(), status=error.status)


def redirect_response(location: str, status: int = 302) -> Response:
    return Response(status=status, headers={'Location': location})
