import os
import json
import boto3

from prolead.cache import TTLCache

SECRET_TTL_SECONDS = 3600  # rotated secrets are picked up within the hour

DB_SECRET_NAME = "prolead/db"
PLACES_SECRET_NAME = "prolead/google-places"

_secrets_cache = TTLCache(default_ttl=SECRET_TTL_SECONDS)


def _get_client():
    env = os.environ.get("ENV", "local")
    if env == "local":
        # Inside a LocalStack Lambda container, LOCALSTACK_HOSTNAME points
        # to the LocalStack gateway. Fall back to localhost for direct use.
        ls_host = os.environ.get("LOCALSTACK_HOSTNAME", "localhost")
        endpoint = f"http://{ls_host}:4566"
        return boto3.client(
            "secretsmanager",
            endpoint_url=endpoint,
            region_name="us-east-1",
            aws_access_key_id="test",
            aws_secret_access_key="test",
        )
    return boto3.client("secretsmanager")


def get_secret(secret_name: str) -> dict:
    """Retrieve a JSON secret from AWS Secrets Manager, cached for an hour."""
    secret = _secrets_cache.get(secret_name)
    if secret is not None:
        return secret

    client = _get_client()
    response = client.get_secret_value(SecretId=secret_name)
    secret = json.loads(response["SecretString"])
    _secrets_cache.set(secret_name, secret)
    return secret


def get_places_api_key() -> str:
    return get_secret(PLACES_SECRET_NAME)["api_key"]
