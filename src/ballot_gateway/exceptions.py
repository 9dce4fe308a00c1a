"""Exception hierarchy for the ballot chain gateway."""

from enum import Enum
from typing import Any


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(GatewayError):
    """Raised at startup when required configuration is missing or malformed."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.key = key


class NetworkError(GatewayError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ValidationError(GatewayError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ReadError(GatewayError):
    """Raised when a read-only contract call fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        address: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.operation = operation
        self.address = address


class WriteFailure(str, Enum):
    """Reasons a state-changing call can fail."""

    SUBMISSION_REJECTED = "submission_rejected"
    REVERTED = "reverted"
    UNCONFIRMED = "unconfirmed"


class WriteError(GatewayError):
    """Raised when a transaction is rejected, reverts, or cannot be confirmed.

    ``REVERTED`` and ``UNCONFIRMED`` failures happen after broadcast, so gas may
    already have been spent; ``tx_hash`` is set for both.
    """

    def __init__(
        self,
        message: str,
        reason: WriteFailure,
        tx_hash: str | None = None,
        receipt: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.reason = reason
        self.tx_hash = tx_hash
        self.receipt = receipt


class ReceiptFailure(str, Enum):
    """Reasons a receipt lookup can fail."""

    NOT_FOUND = "not_found"
    INVALID_HASH = "invalid_hash"
    NETWORK = "network"


class ReceiptError(GatewayError):
    """Raised when a transaction receipt cannot be produced."""

    def __init__(
        self,
        message: str,
        reason: ReceiptFailure,
        tx_hash: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.reason = reason
        self.tx_hash = tx_hash
