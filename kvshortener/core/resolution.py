"""Short URL resolution workflow

A corrupt record is reported exactly like a missing one: clients only ever see
404 for an identifier they can't be redirected from.
"""

import logging

from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.exceptions import DeserializationError, NotFoundError
from kvshortener.models import ShortURLModel


logger = logging.getLogger(__name__)


class ShortURLResolver:
    def __init__(self, dao: KeyValueBaseDAO):
        self.dao = dao

    async def resolve(self, shortcode: str) -> str:
        """Return the destination URL of a short identifier

        Args:
            shortcode (str): Short identifier, without the leading '/'.

        Returns:
            str: The stored raw URL.

        Raises:
            NotFoundError: If the identifier is empty, unknown, or its record is corrupt.
            DataStoreError: If the store is unreachable.
        """
        if not shortcode:
            raise NotFoundError()

        payload = await self.dao.get(Namespace.URLS, shortcode)
        if payload is None:
            logger.info('Short URL record not found.', extra={'event': 'SHORT_URL_NOT_FOUND', 'shortcode': shortcode})
            raise NotFoundError()

        try:
            record = ShortURLModel.from_json(payload)
        except DeserializationError as e:
            logger.warning(
                'Short URL record is corrupt, reporting as not found.',
                extra={'event': 'SHORT_URL_CORRUPT', 'shortcode': shortcode, 'reason': e.message},
            )
            raise NotFoundError() from e

        return record.raw_url
