"""Short identifier allocation

Candidates are sampled uniformly from the configured ID range and checked
against the `urls` namespace until a free one turns up. The key space is large
relative to expected load, so this normally takes a single attempt; the loop
is still capped so a misbehaving store surfaces as an error instead of
spinning forever.

NOTE: a free identifier is only a *candidate*. Two concurrent creators can
      both see the same identifier as free; the creation workflow persists with
      `put_if_absent` and allocates again if it loses that race.
"""

import logging
import random

from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.dao.exceptions import DataStoreError
from kvshortener.exceptions import AllocationError
from kvshortener.settings import ShortenerSettings
from kvshortener.utils.shortener import generate_short_id


logger = logging.getLogger(__name__)


class IdentifierAllocator:
    def __init__(self, dao: KeyValueBaseDAO, settings: ShortenerSettings, rng: random.Random | None = None):
        self.dao = dao
        self.settings = settings
        self.rng = rng or random.SystemRandom()

    def candidate(self) -> str:
        return generate_short_id(self.rng, self.settings.id_min, self.settings.id_max)

    async def is_taken(self, shortcode: str) -> bool:
        try:
            return await self.dao.exists(Namespace.URLS, shortcode)
        except DataStoreError:
            # The conditional write during persistence still rejects real collisions
            logger.warning(
                'Existence check failed, treating candidate as free.',
                exc_info=True,
                extra={'event': 'ALLOCATION_CHECK_FAILED', 'shortcode': shortcode},
            )
            return False

    async def allocate(self) -> str:
        """Return a short identifier with no record in the `urls` namespace

        Performs one read per attempt and no writes.

        Raises:
            AllocationError: If every attempt up to `max_allocation_attempts` collided.
        """
        for attempt in range(1, self.settings.max_allocation_attempts + 1):
            shortcode = self.candidate()
            if not await self.is_taken(shortcode):
                logger.debug('Allocated short identifier %s.', shortcode, extra={'attempts': attempt})
                return shortcode
            logger.info('Short identifier collision, retrying.', extra={'event': 'ALLOCATION_COLLISION', 'shortcode': shortcode})

        logger.error(
            'Gave up allocating a short identifier.',
            extra={'event': 'ALLOCATION_EXHAUSTED', 'attempts': self.settings.max_allocation_attempts},
        )
        raise AllocationError(f'No free short identifier after {self.settings.max_allocation_attempts} attempts')
