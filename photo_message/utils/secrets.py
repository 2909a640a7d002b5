import base64
import binascii
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from photo_message.errors import ResolverError
from photo_message.utils.logger import get_logger, log

logger = get_logger("secrets")


def build_kms_client(region_name: str) -> Any:
    return boto3.client("kms", region_name=region_name)


def decrypt(field: str, value: Optional[str], kms_client: Any) -> str:
    """
    Decrypt a base64-encoded KMS ciphertext and return the plaintext.

    ``field`` labels the value in errors ("accountSid" or "authToken").
    Any failure (bad base64, KMS rejection, a response without usable
    Plaintext) is raised as a ResolverError tagged with the field.
    No retries.
    """
    if not value:
        raise ResolverError(field, "no ciphertext configured")

    try:
        blob = base64.b64decode(value, validate=True)
    except binascii.Error as e:
        log(logger, "secrets.invalid_base64", logging.ERROR, field=field, error=str(e))
        raise ResolverError(field, e) from e

    try:
        resp = kms_client.decrypt(CiphertextBlob=blob)
    except (ClientError, BotoCoreError) as e:
        log(logger, "secrets.decrypt_error", logging.ERROR, field=field, error=str(e))
        raise ResolverError(field, e) from e

    try:
        return resp["Plaintext"].decode("ascii")
    except (KeyError, TypeError, AttributeError, UnicodeDecodeError) as e:
        log(logger, "secrets.bad_plaintext", logging.ERROR, field=field, error=repr(e))
        raise ResolverError(field, f"unusable Plaintext in KMS response: {e!r}") from e
