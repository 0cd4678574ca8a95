"""Immutable shortener policy, injected into every workflow component.

Defaults come from kvshortener.constants; deployments override them through
the `policy` section of the AppConfig document:

    {
        "active_backend": "redis",
        "configs": {
            "router": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "policy": {"guest_max_ttl": 604800, "max_allocation_attempts": 8}
            }
        }
    }
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Self

from kvshortener.constants import TTL, ShortID, HTTP
from kvshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


# fmt: off
@dataclass(frozen=True)
class ShortenerSettings:
    id_min: int = ShortID.MIN                                       # Inclusive lower bound of sampled IDs
    id_max: int = ShortID.MAX                                       # Exclusive upper bound of sampled IDs
    guest_max_ttl: int = TTL.ONE_MONTH                              # Largest TTL (s) a guest may request
    min_ttl: int = TTL.ONE_MINUTE                                   # Smallest non-zero TTL (s)
    cache_control: str = HTTP.CACHE_CONTROL                         # Cache-Control value for static assets
    max_allocation_attempts: int = ShortID.MAX_ALLOCATION_ATTEMPTS  # Retry cap for identifier allocation
    auth_header: str = HTTP.AUTH_HEADER                             # Header carrying the caller's API key
    creation_path: str = HTTP.CREATION_PATH                         # Literal short URL creation endpoint
    redirect_status: int = HTTP.REDIRECT_STATUS                     # Status code of redirect responses
# fmt: on

    def __post_init__(self):
        if self.id_min < 0 or self.id_min >= self.id_max:
            raise BadConfigurationError(f'Invalid ID range: [{self.id_min}, {self.id_max})')
        if self.min_ttl <= 0:
            raise BadConfigurationError(f'min_ttl must be positive (given value: {self.min_ttl})')
        if self.guest_max_ttl < self.min_ttl:
            raise BadConfigurationError(f'guest_max_ttl ({self.guest_max_ttl}) must not be lower than min_ttl ({self.min_ttl})')
        if self.max_allocation_attempts < 1:
            raise BadConfigurationError(f'max_allocation_attempts must be at least 1 (given value: {self.max_allocation_attempts})')
        if self.redirect_status not in {301, 302, 303, 307, 308}:
            raise BadConfigurationError(f'redirect_status must be a redirect status code (given value: {self.redirect_status})')

    @classmethod
    def from_mapping(cls, policy: dict[str, Any] | None) -> Self:
        """Build settings from a `policy` configuration section

        Unknown keys are ignored (and logged) so that older Lambdas keep
        working with newer configuration documents.

        Raises:
            BadConfigurationError: If a value has the wrong type or is inconsistent.
        """
        policy = policy or {}
        fields = {field.name: field for field in dataclasses.fields(cls)}

        unknown = sorted(set(policy) - set(fields))
        if unknown:
            logger.warning('Ignoring unknown policy keys.', extra={'keys': unknown})

        kwargs = {}
        for name, value in policy.items():
            if name not in fields:
                continue
            expected = type(getattr(cls, name))
            if not isinstance(value, expected) or isinstance(value, bool):
                raise BadConfigurationError(f'Policy key {name!r} must be of type {expected.__name__} (given value: {value!r})')
            kwargs[name] = value

        return cls(**kwargs)
