"""Short identifier generation utility

Short identifiers are random integers drawn from a fixed range and written
in base62. Uniqueness is not guaranteed here; callers check the data store
(see kvshortener.core.allocator).

Functions:
    encode(number) -> str:
        Encode a non-negative integer as a base62 string.
    decode(shortcode) -> int:
        Decode a base62 string back into an integer.
    generate_short_id(rng, lower, upper) -> str:
        Sample an integer from [lower, upper) and encode it.

Example:
    >>> from kvshortener.utils.shortener import encode, decode
    >>> encode(15_000_000)
    '10wBU'
    >>> decode('10wBU')
    15000000
"""

import random
import string


ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 uppercase + 26 lowercase
_INDEX = {char: i for i, char in enumerate(ALPHABET)}


def encode(number: int) -> str:
    """Encode a non-negative integer into base62 (most significant digit first).

    Args:
        number (int): Value to encode.

    Returns:
        str: base62 representation, '0' for zero.
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError(f'Number must be of type integer (given type: {type(number)}).')
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    if number == 0:
        return ALPHABET[0]

    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(reversed(digits))


def decode(shortcode: str) -> int:
    if not shortcode:
        raise ValueError('Shortcode must be a non-empty string.')

    number = 0
    for char in shortcode:
        try:
            number = number * BASE + _INDEX[char]
        except KeyError:
            raise ValueError(f'Invalid base62 character {char!r} in {shortcode!r}.') from None
    return number


def generate_short_id(rng: random.Random, lower: int, upper: int) -> str:
    """Sample a uniformly distributed integer in [lower, upper) and base62 encode it.

    Args:
        rng (random.Random):
            Random source. Pass `random.SystemRandom()` in production, a seeded
            `random.Random` in tests.
        lower (int): Inclusive lower bound.
        upper (int): Exclusive upper bound.

    Returns:
        str: Candidate short identifier.
    """
    return encode(rng.randrange(lower, upper))
