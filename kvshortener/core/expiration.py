"""Expiration policy for new short URLs

Rules, evaluated in order:
    1. A missing TTL means 0 ("never expires").
    2. A TTL of 0 or above the guest maximum requires an authenticated caller.
    3. A non-zero TTL below the minimum is rejected. Zero is exempt.
    4. An expiration past the latest time the store accepts is rejected.

Example:
    >>> policy = ExpirationPolicy(ShortenerSettings())
    >>> policy.evaluate(120, None, now_ms=1_000)
    121000
    >>> policy.evaluate(None, UserModel(username='alice', api_key='k'), now_ms=1_000)
    0
"""

from kvshortener.constants import TTL
from kvshortener.models import UserModel
from kvshortener.settings import ShortenerSettings
from kvshortener.exceptions import NeedAuthError, TTLError
from kvshortener.utils.helpers import now_millis


class ExpirationPolicy:
    def __init__(self, settings: ShortenerSettings):
        self.settings = settings

    def requires_auth(self, ttl: int) -> bool:
        return ttl == 0 or ttl > self.settings.guest_max_ttl

    def evaluate(self, requested_ttl: int | None, caller: UserModel | None, now_ms: int | None = None) -> int:
        """Validate a requested TTL and compute the absolute expiration time

        Args:
            requested_ttl (int | None):
                Requested lifetime in seconds. None is treated as 0.
            caller (UserModel | None):
                Authenticated caller, None for guests.
            now_ms (int | None):
                Current time in epoch milliseconds. Read from the clock when None.

        Returns:
            int: Absolute expiration in epoch milliseconds, 0 if the link never expires.

        Raises:
            NeedAuthError: If a guest requests a TTL of 0 or above the guest maximum.
            TTLError: If a non-zero TTL is below the minimum or expires too far out.
        """
        ttl = requested_ttl or 0

        if self.requires_auth(ttl) and caller is None:
            raise NeedAuthError()

        if ttl != 0 and ttl < self.settings.min_ttl:
            raise TTLError(f'The TTL must be greater than {self.settings.min_ttl} seconds.')

        if ttl == 0:
            return 0

        now_ms = now_millis() if now_ms is None else now_ms
        expire_time = now_ms + ttl * 1000
        if expire_time // 1000 > TTL.MAX_EXPIRE_AT:
            raise TTLError('The TTL is too large.')
        return expire_time
