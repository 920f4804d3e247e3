"""
Error codes returned by the authentication use cases.

Routes map these to HTTP status codes; clients receive them verbatim in
{"error": {"code": ..., "message": ...}}.
"""

# Revocation gate
MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
INVALID_SIGNATURE = "INVALID_SIGNATURE"
ACCESS_TOKEN_EXPIRED = "ACCESS_TOKEN_EXPIRED"  # recoverable through silent refresh
TOKEN_REVOKED = "TOKEN_REVOKED"
FORBIDDEN_ROUTE = "FORBIDDEN_ROUTE"

# Refresh
REFRESH_TOKEN_EXPIRED = "REFRESH_TOKEN_EXPIRED"  # terminal, forces a new login

# Login / registration
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
INVALID_PASSWORD = "INVALID_PASSWORD"
USER_NOT_FOUND = "USER_NOT_FOUND"

# Password reset
OTP_MISMATCH = "OTP_MISMATCH"
OTP_EXPIRED = "OTP_EXPIRED"
OTP_NOT_VERIFIED = "OTP_NOT_VERIFIED"
RESET_WINDOW_EXPIRED = "RESET_WINDOW_EXPIRED"
DUPLICATE_PASSWORD = "DUPLICATE_PASSWORD"

# Session and user management
FORBIDDEN = "FORBIDDEN"
SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
