from kvshortener.exceptions import ServerError


class DAOError(ServerError):
    """Generic base class for DAO-related exceptions."""


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    default_message = 'Data store unavailable'
