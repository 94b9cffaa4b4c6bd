"""
Infrastructure adapter: AWS Secrets Manager -> ISecretStore.

When STOCK_REPORT_SECRET_ARN is set, load_secrets() calls load_into_env() once
at startup.  The secret is a JSON object such as
``{"POLYGON_API_KEY": "...", "LANGFUSE_PUBLIC_KEY": "...", "LANGFUSE_SECRET_KEY": "..."}``;
Settings are re-read afterwards so the Polygon key reaches the price fetcher.
"""

import json
import logging
import os

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Loads the report service's API keys from a JSON secret."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        response = self._client.get_secret_value(SecretId=secret_arn)
        secret = json.loads(response["SecretString"])
        if not isinstance(secret, dict):
            raise ValueError(f"Secret {secret_arn!r} must be a JSON object of key-value pairs")
        return secret

    def load_into_env(self, secret_arn: str) -> list[str]:
        """Export every key of the secret to os.environ, overwriting existing values.

        Returns:
            The variable names set (values are never logged).
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ[key] = str(value)
        names = sorted(secrets)
        logger.info("Loaded %s from Secrets Manager", ", ".join(names) or "no keys")
        return names
