"""Gateway error taxonomy, each error knows its HTTP status"""
from typing import Optional


class GatewayError(Exception):
    """Base error resolved into a single `{"error": message}` response"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(GatewayError):
    status_code = 400
    default_message = "Invalid input data"


class MissingFieldsError(ClientInputError):
    default_message = "All fields must be provided"


class NoUpdatableFieldsError(ClientInputError):
    """Partial update where no candidate field was present"""

    default_message = "No updates provided"


class NotFoundError(GatewayError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(GatewayError):
    default_message = "Failed to fetch response from say function"


class DataAccessError(GatewayError):
    default_message = "Database error"


class PoolExhaustedError(DataAccessError):
    """No connection became free within the configured acquire timeout"""

    default_message = "Timed out waiting for a database connection"


class DatabaseConnectionError(DataAccessError):
    """Opening a physical connection failed (network, auth, pool not started)"""

    default_message = "Could not connect to the database"
