# External package imports
from pymongo.errors import (
    AutoReconnect,
    ConnectionFailure,
    ExecutionTimeout,
    NetworkTimeout,
    PyMongoError,
    ServerSelectionTimeoutError,
    WTimeoutError,
)

# Local application imports
from ...domain.exceptions import (
    DatabaseConnectionError,
    DatabaseTimeoutError,
    PersistenceError,
)


def translate_error(error: PyMongoError, operation: str) -> PersistenceError:
    """
    Map a PyMongo error onto the gate's persistence errors.

    Timeouts and lost connections become retryable errors; everything else
    is a plain, non-retryable PersistenceError.
    """
    # Timeout classes subclass AutoReconnect / ConnectionFailure, check them first
    if isinstance(error, (NetworkTimeout, ExecutionTimeout, WTimeoutError, ServerSelectionTimeoutError)):
        return DatabaseTimeoutError(f"{operation} timed out: {error}", operation=operation)
    if isinstance(error, (AutoReconnect, ConnectionFailure)):
        return DatabaseConnectionError(f"{operation} lost the database connection: {error}", operation=operation)
    return PersistenceError(f"{operation} failed: {error}", operation=operation)
