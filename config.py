import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./storefront.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PREFIX = data.get("API_PREFIX", "/api/v1")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Access and refresh tokens are signed with distinct secrets
    ACCESS_TOKEN_SECRET = data.get(
        "ACCESS_TOKEN_SECRET", "dev-access-secret-change-in-production"
    )
    REFRESH_TOKEN_SECRET = data.get(
        "REFRESH_TOKEN_SECRET", "dev-refresh-secret-change-in-production"
    )
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 60))
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "refresh_token")
    REFRESH_COOKIE_SECURE = bool(data.get("REFRESH_COOKIE_SECURE", False))

    # Accept a signature-valid access token that is no longer stored as long as
    # its owner still has at least one session
    SESSION_FALLBACK_LENIENT = bool(data.get("SESSION_FALLBACK_LENIENT", False))
    # An expired access token replaced in its session row less than this many
    # seconds ago can still be refreshed (two requests raced on the same token)
    REFRESH_RACE_GRACE_SECONDS = int(data.get("REFRESH_RACE_GRACE_SECONDS", 30))
    ADMIN_ROUTE_PATTERN = data.get("ADMIN_ROUTE_PATTERN", rf"^{API_PREFIX}/admin/")

    OTP_TTL_MINUTES = int(data.get("OTP_TTL_MINUTES", 10))
    RESET_WINDOW_MINUTES = int(data.get("RESET_WINDOW_MINUTES", 30))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    MAIL_FROM = data.get("MAIL_FROM", "no-reply@storefront.local")
