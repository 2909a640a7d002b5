import os
from dataclasses import dataclass
from typing import Optional

from photo_message.errors import ConfigurationError
from photo_message.utils.logger import get_logger

logger = get_logger("config")

REQUIRED_VARS = (
    "TWILIO_ACCOUNT_SID_ENCRYPTED",
    "TWILIO_AUTH_TOKEN_ENCRYPTED",
    "TWILIO_NUMBER",
)


@dataclass(frozen=True)
class Settings:
    account_sid_encrypted: str
    auth_token_encrypted: str
    twilio_number: str
    region: str
    # Assignment store; carried in configuration but not read by the handler
    photo_assignments_table: Optional[str] = None


_settings: Optional[Settings] = None


def _load_env() -> Settings:
    """
    Load the handler configuration from environment variables.

    TWILIO_ACCOUNT_SID_ENCRYPTED: base64 KMS ciphertext of the Twilio account SID
    TWILIO_AUTH_TOKEN_ENCRYPTED:  base64 KMS ciphertext of the Twilio auth token
    TWILIO_NUMBER:                sender phone number
    TABLE_PHOTO_ASSIGNMENTS_NAME: photo assignment table (optional)
    AWS_REGION:                   region for the KMS client (default us-east-1)

    Raises ConfigurationError listing every missing variable.
    """
    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    if missing:
        msg = f"Missing required environment variables: {', '.join(missing)}"
        logger.error(msg)
        raise ConfigurationError(msg)

    return Settings(
        account_sid_encrypted=os.environ["TWILIO_ACCOUNT_SID_ENCRYPTED"],
        auth_token_encrypted=os.environ["TWILIO_AUTH_TOKEN_ENCRYPTED"],
        twilio_number=os.environ["TWILIO_NUMBER"],
        region=os.getenv("AWS_REGION", "us-east-1"),
        photo_assignments_table=os.getenv("TABLE_PHOTO_ASSIGNMENTS_NAME"),
    )


def get_settings() -> Settings:
    """Settings are read once per container and reused afterwards."""
    global _settings
    if _settings is None:
        _settings = _load_env()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
