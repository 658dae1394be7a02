"""Application configuration."""

from os import getenv

from pydantic import BaseModel


def _optional_flag(name: str) -> bool | None:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip() == "1"


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "orderdesk API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./orderdesk.db")

    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_audience: str = getenv("JWT_AUDIENCE", "authenticated")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    auth_cookie_prefix: str = getenv("AUTH_COOKIE_PREFIX", "sb-")

    restaurant_cookie_name: str = "restaurant_id"
    restaurant_slug_cookie_name: str = "restaurant_slug"
    restaurant_cookie_max_age: int = 60 * 60 * 24 * 30
    restaurant_timezone: str = getenv("RESTAURANT_TIMEZONE", "Europe/Warsaw")

    google_maps_api_key: str = getenv("GOOGLE_MAPS_API_KEY", "")
    distance_matrix_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    http_timeout_seconds: float = float(getenv("HTTP_TIMEOUT_SECONDS", "15"))

    resend_api_key: str = getenv("RESEND_API_KEY", "")
    mail_from: str = getenv("MAIL_FROM", "Sushi Tutaj <restauracja@sushitutaj.pl>")

    sms_provider: str = getenv("SMS_PROVIDER", "smsapi").lower()
    smsapi_token: str = getenv("SMSAPI_TOKEN", "")
    smsapi_url: str = "https://api.smsapi.pl/sms.do"
    sms_sender_id: str = getenv("SMS_SENDER_ID", "")
    serversms_login: str = getenv("SERVERSMS_LOGIN", "")
    serversms_password: str = getenv("SERVERSMS_PASSWORD", "")
    serversms_url: str = "https://api2.serwersms.pl/messages/send_sms"
    sms_brand: str = getenv("SMS_BRAND", "Sushi Tutaj")

    vapid_public_key: str = getenv("VAPID_PUBLIC_KEY", "")
    vapid_private_key: str = getenv("VAPID_PRIVATE_KEY", "")
    vapid_subject: str = getenv("VAPID_SUBJECT", "mailto:admin@example.com")

    notify_retries: int = int(getenv("NOTIFY_RETRIES", "3"))
    notify_retry_delay: float = float(getenv("NOTIFY_RETRY_DELAY", "1.5"))

    membership_role_column: bool | None = _optional_flag("MEMBERSHIP_ROLE_COLUMN")

    admin_email: str = getenv("ADMIN_EMAIL", "")
    admin_password: str = getenv("ADMIN_PASSWORD", "")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"prod", "production"}


settings: Settings = Settings()
