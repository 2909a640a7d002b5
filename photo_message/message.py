import logging
import traceback
from typing import Any, Callable, Dict, Optional

from photo_message.composer import compose
from photo_message.errors import HandlerFailure, PhotoMessageError
from photo_message.utils.config import get_settings
from photo_message.utils.logger import get_logger, log
from photo_message.utils.twilio_client import TwilioState, send_message

logger = get_logger("message")

MODULE = "message.py"

# Twilio credentials + client, decrypted on first use and kept per container
twilio_state = TwilioState()

Callback = Callable[[Optional[str], Optional[Dict[str, Any]]], None]


def handler(event: Dict[str, Any], context: Any, callback: Callback, state: Optional[TwilioState] = None) -> None:
    """
    Text the assigned photographer asking for a picture of the product.

    Calls ``callback(None, event)`` on success, or ``callback(error, None)``
    with a single failure string. The callback is invoked exactly once.
    """
    state = state or twilio_state
    log(
        logger,
        "message.received",
        request_id=getattr(context, "aws_request_id", None),
        event=event,
    )

    try:
        settings = get_settings()
        state.ensure_initialized(event, settings)
        message = compose(event, settings.twilio_number)
        resp = send_message(state.client, message)
    except PhotoMessageError as e:
        error = f"{MODULE} {e}"
        log(logger, "message.failed", logging.ERROR, error=error)
        callback(error, None)
        return
    except Exception as e:
        error = f"{MODULE} {e}:\n{traceback.format_exc()}"
        logger.exception("message.unexpected_error")
        callback(error, None)
        return

    log(
        logger,
        "message.sent",
        sid=getattr(resp, "sid", "<no-sid>"),
        status=getattr(resp, "status", None),
        to=message.to,
        product_id=event.get("data", {}).get("id"),
    )
    callback(None, event)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    AWS Lambda entry point.

    Returns the original event on success; raises HandlerFailure with the
    reported failure string so the invocation is marked failed.
    """
    outcome: Dict[str, Any] = {}

    def _callback(error: Optional[str], result: Optional[Dict[str, Any]] = None) -> None:
        outcome["error"] = error
        outcome["result"] = result

    handler(event, context, _callback)

    if outcome["error"] is not None:
        raise HandlerFailure(outcome["error"])
    return outcome["result"]
