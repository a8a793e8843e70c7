"""Bearer token verification.

Learn: Tokens are issued and signed by the external identity service.
This package only verifies them and exposes their claims; the
account behind a token is resolved by services.account_service.
"""
