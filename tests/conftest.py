import base64
import json
import os
import threading
import time

import pytest
from botocore.exceptions import ClientError

from photo_message.utils.config import reset_settings

ACCOUNT_SID_CIPHERTEXT = b"encrypted-account-sid"
AUTH_TOKEN_CIPHERTEXT = b"encrypted-auth-token"
ACCOUNT_SID = "ACxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx"
AUTH_TOKEN = "tok"
TWILIO_NUMBER = "+15550001111"

EVENTS_DIR = os.path.join(os.path.dirname(__file__), "events")


class StubKMS:
    """Stands in for boto3's KMS client; maps ciphertext bytes to plaintext."""

    def __init__(self, fail=(), delay=0.0, barrier=None):
        self.plaintexts = {
            ACCOUNT_SID_CIPHERTEXT: ACCOUNT_SID.encode("ascii"),
            AUTH_TOKEN_CIPHERTEXT: AUTH_TOKEN.encode("ascii"),
        }
        self.fail = set(fail)
        self.delay = delay
        self.barrier = barrier
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def decrypt(self, CiphertextBlob):
        with self._lock:
            self.calls.append(CiphertextBlob)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.barrier is not None:
                # Both calls must be in flight together to get past here
                self.barrier.wait()
            if self.delay:
                time.sleep(self.delay)
        finally:
            with self._lock:
                self.in_flight -= 1
        if CiphertextBlob in self.fail:
            raise ClientError(
                {"Error": {"Code": "InvalidCiphertextException", "Message": "bad ciphertext"}},
                "Decrypt",
            )
        return {"Plaintext": self.plaintexts[CiphertextBlob]}


class StubTwilioMsg:
    def __init__(self, sid="SMYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYY", status="queued"):
        self.sid = sid
        self.status = status


class StubTwilioClient:
    """Mimics twilio.rest.Client's ``messages.create`` surface."""

    def __init__(self, account_sid=None, auth_token=None, error=None):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.error = error
        self.sent = []
        self.messages = self

    def create(self, to, from_, body):
        self.sent.append({"to": to, "from_": from_, "body": body})
        if self.error is not None:
            raise self.error
        return StubTwilioMsg()


class StubClientFactory:
    """Records every client construction; returns one shared stub client."""

    def __init__(self, error=None):
        self.error = error
        self.built = []
        self.client = None

    def __call__(self, account_sid, auth_token):
        self.built.append((account_sid, auth_token))
        self.client = StubTwilioClient(account_sid, auth_token, error=self.error)
        return self.client


def load_event(name="photographer_assignment.json"):
    with open(os.path.join(EVENTS_DIR, name), "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def twilio_env(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID_ENCRYPTED", base64.b64encode(ACCOUNT_SID_CIPHERTEXT).decode("ascii"))
    monkeypatch.setenv("TWILIO_AUTH_TOKEN_ENCRYPTED", base64.b64encode(AUTH_TOKEN_CIPHERTEXT).decode("ascii"))
    monkeypatch.setenv("TWILIO_NUMBER", TWILIO_NUMBER)
    monkeypatch.setenv("TABLE_PHOTO_ASSIGNMENTS_NAME", "photo-assignments")
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def event():
    return load_event()
