# utils/twilio_client.py

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from requests.exceptions import RequestException
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client as TwilioClient

from photo_message.composer import OutboundMessage
from photo_message.errors import DispatchError, InitializationError, ResolverError
from photo_message.utils.config import Settings
from photo_message.utils.logger import get_logger, log
from photo_message.utils.secrets import build_kms_client, decrypt

logger = get_logger("twilio_client")

FIELD_ACCOUNT_SID = "accountSid"
FIELD_AUTH_TOKEN = "authToken"
TWILIO_ERROR_DOCS = "https://www.twilio.com/docs/errors/{code}"


class TwilioState:
    """
    Process-wide Twilio credentials and client.

    Uninitialized until ``ensure_initialized`` decrypts both credentials;
    Ready once the client is built. The credentials and client are only
    stored after both decryptions succeed, so a failure leaves the state
    Uninitialized and the next invocation tries again.
    """

    def __init__(
        self,
        kms_client: Any = None,
        client_factory: Callable[[str, str], Any] = TwilioClient,
    ):
        self._kms_client = kms_client
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self.account_sid: Optional[str] = None
        self.auth_token: Optional[str] = None
        self.client: Any = None

    @property
    def is_ready(self) -> bool:
        return self.client is not None

    def _kms(self, settings: Settings) -> Any:
        if self._kms_client is None:
            self._kms_client = build_kms_client(settings.region)
        return self._kms_client

    def ensure_initialized(self, event: dict, settings: Settings) -> dict:
        """
        Decrypt the Twilio credentials and build the client, once.

        Returns ``event`` unchanged so the call can sit inline in the
        pipeline. Raises InitializationError naming the field that failed.
        """
        if self.is_ready:
            return event

        with self._lock:
            # Another invocation may have finished while we waited
            if self.is_ready:
                return event

            kms = self._kms(settings)
            with ThreadPoolExecutor(max_workers=2) as executor:
                futures = [
                    executor.submit(decrypt, FIELD_ACCOUNT_SID, settings.account_sid_encrypted, kms),
                    executor.submit(decrypt, FIELD_AUTH_TOKEN, settings.auth_token_encrypted, kms),
                ]

            try:
                account_sid, auth_token = [f.result() for f in futures]
            except ResolverError as e:
                err = InitializationError(e)
                log(logger, "twilio_client.init_error", logging.ERROR, field=e.field, error=str(err))
                raise err from e

            client = self._client_factory(account_sid, auth_token)
            self.account_sid = account_sid
            self.auth_token = auth_token
            self.client = client
            logger.info("Twilio client initialized successfully")

        return event


def _more_info(e: TwilioRestException) -> Optional[str]:
    # Older SDKs set more_info; current ones only carry the code
    more_info = getattr(e, "more_info", None)
    if not more_info and e.code:
        more_info = TWILIO_ERROR_DOCS.format(code=e.code)
    return more_info


def send_message(client: Any, message: OutboundMessage) -> Any:
    """
    Create the SMS through Twilio and return the message resource.

    Twilio rejections and transport failures (Twilio unreachable, timeouts)
    are raised as DispatchError; nothing is retried.
    """
    try:
        resp = client.messages.create(to=message.to, from_=message.from_, body=message.body)
    except TwilioRestException as e:
        more_info = _more_info(e)
        if e.code:
            cause = f"HTTP {e.status} error {e.code}: {e.msg}"
        else:
            cause = f"HTTP {e.status} error: {e.msg}"
        if more_info:
            cause = f"{cause} ({more_info})"
        err = DispatchError(cause, status=e.status, code=e.code, more_info=more_info)
        log(
            logger,
            "twilio_client.send_error",
            logging.ERROR,
            to=message.to,
            status=e.status,
            code=e.code,
            error=str(err),
        )
        raise err from e
    except (TwilioException, RequestException) as e:
        err = DispatchError(e)
        log(logger, "twilio_client.send_error", logging.ERROR, to=message.to, error=str(err))
        raise err from e

    return resp
