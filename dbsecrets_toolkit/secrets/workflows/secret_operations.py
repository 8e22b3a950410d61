"""Workflow for fetching and decoding database secrets."""
import base64
import binascii
import logging
from typing import Optional

from ..domains.aws_client import AWSSecretClient
from ..domains.config_loader import config_from_env
from ..domains.errors import SecretDecodeError
from ..domains.models import SecretDetails, SecretsConfig

logger = logging.getLogger(__name__)


def decode_binary_secret(secret_binary: bytes) -> str:
    """
    Decode a base64 encoded SecretBinary payload to text.

    Raises:
        SecretDecodeError: If the payload is not valid base64 or not UTF-8
    """
    # Line breaks from wrapped encoders (base64 -w76, encodebytes) are skipped
    stripped = secret_binary.replace(b"\r", b"").replace(b"\n", b"")
    try:
        decoded = base64.b64decode(stripped, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Base64 Decode Error: {e}")
        raise SecretDecodeError(f"Secret binary is not valid base64: {e}") from e

    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"Decoded secret binary is not UTF-8: {e}")
        raise SecretDecodeError(f"Decoded secret binary is not valid UTF-8: {e}") from e


def fetch_secret_details(config: SecretsConfig, client: Optional[AWSSecretClient] = None) -> SecretDetails:
    """
    Fetch a secret and parse it into SecretDetails.

    Args:
        config: Secret id and region to read from
        client: Client to use (a new one bound to config.region if not provided)

    Returns:
        Populated SecretDetails

    Raises:
        ClientConstructionError: If the Secrets Manager client cannot be built
        SecretFetchError: If GetSecretValue fails (no retry is attempted)
        SecretDecodeError: If a binary payload cannot be decoded
        SecretParseError: If the payload is not a valid secret JSON object
    """
    if client is None:
        client = AWSSecretClient(config.region)

    response = client.fetch_secret_value(config.secret_id, config.version_stage)

    # Depending on whether the secret is a string or binary, one of these is set
    secret_string = response.get("SecretString")
    if secret_string is not None:
        payload = secret_string
    else:
        payload = decode_binary_secret(response.get("SecretBinary", b""))

    details = SecretDetails.from_json(payload)
    logger.debug(f"Fetched secret '{config.secret_id}' for database '{details.dbname}'")
    return details


def get_secret(secret_env_var: str) -> SecretDetails:
    """
    Fetch database connection details using environment configuration.

    Reads the secret id from the environment variable named by
    ``secret_env_var`` and the region from the ``region`` variable (or the
    config file). Each call makes a fresh request; nothing is cached.

    Args:
        secret_env_var: Name of the environment variable holding the secret id

    Returns:
        Populated SecretDetails

    Raises:
        SecretsError: Any subclass, see fetch_secret_details
    """
    return fetch_secret_details(config_from_env(secret_env_var))
