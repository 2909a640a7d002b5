"""
Product Photo Assignment SMS
============================

Lambda handler that texts the photographer assigned to a new product,
asking them to snap a picture of it. Messages are sent through Twilio;
the Twilio credentials arrive KMS-encrypted and are decrypted once per
container.

Modules under this package:
- message.py   → Lambda entry point (handler / lambda_handler)
- composer.py  → builds the outbound SMS from the assignment event
- errors.py    → failure types reported to the invocation harness
- utils/       → config, logging, KMS decryption, Twilio client state

Environment variables expected:
  • TWILIO_ACCOUNT_SID_ENCRYPTED  - KMS ciphertext (base64) of the account SID
  • TWILIO_AUTH_TOKEN_ENCRYPTED   - KMS ciphertext (base64) of the auth token
  • TWILIO_NUMBER                 - Sender phone number
  • TABLE_PHOTO_ASSIGNMENTS_NAME  - Photo assignment table (not read here)
  • AWS_REGION                    - AWS region for KMS (default: us-east-1)
  • LOG_LEVEL                     - Log verbosity (default: INFO)
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
