"""Error types for database secret retrieval."""
import logging
from enum import Enum
from typing import Optional


class RemoteErrorKind(Enum):
    """Known Secrets Manager failure codes for GetSecretValue.

    Used for log output only. Every kind propagates the same way.
    """

    DECRYPTION_FAILURE = "DecryptionFailure"
    INTERNAL_SERVICE_ERROR = "InternalServiceError"
    INVALID_PARAMETER = "InvalidParameterException"
    INVALID_REQUEST = "InvalidRequestException"
    RESOURCE_NOT_FOUND = "ResourceNotFoundException"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "RemoteErrorKind":
        for kind in cls:
            if kind.value == code:
                return kind
        return cls.UNKNOWN

    @property
    def log_level(self) -> int:
        if self is RemoteErrorKind.INTERNAL_SERVICE_ERROR:
            return logging.WARNING
        return logging.ERROR

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    RemoteErrorKind.DECRYPTION_FAILURE: "Secrets Manager can't decrypt the secret using the provided KMS key",
    RemoteErrorKind.INTERNAL_SERVICE_ERROR: "An error occurred on the Secrets Manager side",
    RemoteErrorKind.INVALID_PARAMETER: "A parameter value is invalid",
    RemoteErrorKind.INVALID_REQUEST: "A parameter value is not valid for the current state of the secret",
    RemoteErrorKind.RESOURCE_NOT_FOUND: "The requested secret was not found",
    RemoteErrorKind.UNKNOWN: "Unclassified Secrets Manager error",
}


class SecretsError(Exception):
    """Base class for all secret retrieval errors."""
    pass


class ConfigError(SecretsError):
    """Configuration file could not be read or is invalid."""
    pass


class ClientConstructionError(SecretsError):
    """Secrets Manager client could not be built (e.g. bad region)."""
    pass


class SecretFetchError(SecretsError):
    """GetSecretValue failed.

    Attributes:
        secret_id: Identifier that was requested
        kind: Classified remote error, for diagnostics only
    """

    def __init__(self, message: str, secret_id: str, kind: RemoteErrorKind = RemoteErrorKind.UNKNOWN):
        super().__init__(message)
        self.secret_id = secret_id
        self.kind = kind


class SecretDecodeError(SecretsError):
    """Binary secret payload is not valid base64 or not valid UTF-8."""
    pass


class SecretParseError(SecretsError):
    """Secret payload is not a JSON object with the expected field types."""
    pass
