"""
Shared helpers for the photo assignment SMS handler:

- config.py          → environment configuration, read once per container
- logger.py          → structured JSON logging
- secrets.py         → KMS decryption of the Twilio credentials
- twilio_client.py   → lazily initialized Twilio client and message send
"""
