"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

Returns the raw SecretString; parsing and caching of the exchange credentials
live in CredentialCache so this adapter stays a thin boto3 wrapper.
"""

import os

import boto3

from src.domain.ports.secret_store_port import ISecretStore


class SecretsManagerAdapter(ISecretStore):
    """Fetches secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> str:
        """Fetch a secret string by ARN or name.

        Raises:
            ValueError: if the secret has no SecretString (binary secret).
            botocore.exceptions.ClientError: if the secret cannot be read.
        """
        response = self._client.get_secret_value(SecretId=secret_id)
        secret_string = response.get("SecretString")
        if secret_string is None:
            raise ValueError("Secret string is null.")
        return secret_string
