"""Caller identity resolution from the API key header

An API key that doesn't match any user is *not* rejected: the caller is simply
treated as a guest and falls under the guest TTL policy. A user record that
exists but can't be decoded is an error, not a downgrade.
"""

import logging

from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.models import UserModel


logger = logging.getLogger(__name__)


class AuthResolver:
    def __init__(self, dao: KeyValueBaseDAO):
        self.dao = dao

    async def resolve(self, header_value: str | None) -> UserModel | None:
        """Look up the user owning an API key

        Args:
            header_value (str | None): Raw value of the auth header, if any.

        Returns:
            UserModel | None: The user, or None for anonymous callers.

        Raises:
            DeserializationError: If the stored user record is malformed.
            DataStoreError: If the user store is unreachable.
        """
        if not header_value:
            return None

        payload = await self.dao.get(Namespace.USERS, header_value)
        if payload is None:
            logger.info('Unknown API key, treating caller as guest.', extra={'event': 'AUTH_UNKNOWN_KEY'})
            return None

        user = UserModel.from_json(payload)
        logger.debug('Resolved caller %s.', user.username)
        return user
