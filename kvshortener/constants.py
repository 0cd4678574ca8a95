from enum import IntEnum, StrEnum


class TTL:
    """TTL durations in seconds."""

    # Minimum non-zero TTL a caller may request
    ONE_MINUTE = 60
    # Largest TTL a guest (unauthenticated caller) may request (30 days in seconds)
    ONE_MONTH = 2_592_000  # 60 * 60 * 24 * 30
    # Largest TTL a request body may carry (uint64)
    MAX_REQUESTED = 2**64 - 1
    # Latest expiration, in epoch seconds, a store accepts (LLONG_MAX / 1000)
    MAX_EXPIRE_AT = (2**63 - 1) // 1000


class ShortID:
    """Bounds of the integer space short identifiers are sampled from."""

    MIN = 15_000_000  # inclusive
    MAX = 3_500_000_000_000  # exclusive
    MAX_ALLOCATION_ATTEMPTS = 32


class HTTP:
    """HTTP boundary defaults."""

    CREATION_PATH = '/new'
    AUTH_HEADER = 'X-AUTH-KEY'
    CACHE_CONTROL = 'max-age=14400'
    REDIRECT_STATUS = 302
    INDEX_DOCUMENT = 'index.html'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class ErrorCode(IntEnum):
    """Stable error codes carried in every error response body."""

    SERVER_ERROR = -1
    NOT_FOUND = -2
    METHOD_NOT_ALLOWED = -3
    SERIALIZATION_ERROR = -4
    DESERIALIZATION_ERROR = 100
    URL_ERROR = 101
    TTL_ERROR = 102
    NEED_AUTH = 401
