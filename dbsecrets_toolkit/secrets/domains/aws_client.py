"""AWS Secrets Manager client wrapper."""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import ClientConstructionError, RemoteErrorKind, SecretFetchError
from .models import VERSION_STAGE_CURRENT

logger = logging.getLogger(__name__)


def classify_client_error(error: ClientError) -> RemoteErrorKind:
    """Map a botocore ClientError to a RemoteErrorKind."""
    code = error.response.get("Error", {}).get("Code")
    return RemoteErrorKind.from_code(code)


class AWSSecretClient:
    """Wrapper around the boto3 Secrets Manager client.

    One instance per fetch; nothing is cached between calls.
    """

    def __init__(self, region: str, session: Optional[boto3.session.Session] = None):
        self.region = region
        self._session = session
        self._client = None

    @property
    def client(self):
        """
        Lazy-initialize client.

        Raises:
            ClientConstructionError: If boto3 cannot build a client for the region
        """
        if self._client is None:
            session = self._session or boto3.session.Session()
            try:
                # Empty region falls back to the SDK's own region resolution
                self._client = session.client("secretsmanager", region_name=self.region or None)
            except (BotoCoreError, ValueError) as e:
                logger.error(f"Failed to create Secrets Manager client for region '{self.region}': {e}")
                raise ClientConstructionError(
                    f"Cannot create Secrets Manager client for region '{self.region}': {e}"
                ) from e
        return self._client

    def fetch_secret_value(self, secret_id: str, version_stage: str = VERSION_STAGE_CURRENT) -> Dict[str, Any]:
        """
        Fetch a secret value from AWS Secrets Manager.

        Makes exactly one GetSecretValue request. Known error codes are
        logged with their description; all failures raise the same way.

        Args:
            secret_id: Secret name or ARN
            version_stage: Staging label to read, AWSCURRENT by default

        Returns:
            GetSecretValue response dict (SecretString or SecretBinary set)

        Raises:
            ClientConstructionError: If the client cannot be built
            SecretFetchError: If the request fails
        """
        client = self.client
        try:
            return client.get_secret_value(SecretId=secret_id, VersionStage=version_stage)
        except ClientError as e:
            kind = classify_client_error(e)
            logger.log(kind.log_level, f"{kind.value}: {kind.description} ({secret_id}): {e}")
            raise SecretFetchError(
                f"Failed to fetch secret '{secret_id}': {e}", secret_id=secret_id, kind=kind
            ) from e
        except BotoCoreError as e:
            logger.error(f"Secrets Manager request failed for {secret_id}: {e}")
            raise SecretFetchError(
                f"Failed to fetch secret '{secret_id}': {e}", secret_id=secret_id
            ) from e
