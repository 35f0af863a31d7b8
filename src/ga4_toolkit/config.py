from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv
from google.oauth2 import service_account

GOOGLE_SCOPE_ANALYTICS = "https://www.googleapis.com/auth/analytics.readonly"
# URL inspection is rejected under the read-only webmasters scope.
GOOGLE_SCOPE_WEBMASTERS = "https://www.googleapis.com/auth/webmasters"
GOOGLE_SCOPE_INDEXING = "https://www.googleapis.com/auth/indexing"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Source checkout root; set GA4_RESULTS_DIR when installed into site-packages.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
RESULTS_DIR = PROJECT_ROOT / "results"

DEFAULT_DATE_RANGE = "30d"

ENV_PROPERTY_ID = "GA4_PROPERTY_ID"
ENV_CLIENT_EMAIL = "GA4_CLIENT_EMAIL"
ENV_PRIVATE_KEY = "GA4_PRIVATE_KEY"
ENV_DEFAULT_DATE_RANGE = "GA4_DEFAULT_DATE_RANGE"
ENV_SITE_URL = "SEARCH_CONSOLE_SITE_URL"
ENV_RESULTS_DIR = "GA4_RESULTS_DIR"


@dataclass(frozen=True)
class Settings:
    property_id: str
    client_email: str
    private_key: str
    default_date_range: str
    results_dir: Path
    site_url: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def load_env(env_file: str | None = None) -> None:
    if env_file:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(override=False)


def get_settings() -> Settings:
    """Snapshot of the current environment. Never cached, never raises."""
    return Settings(
        property_id=os.getenv(ENV_PROPERTY_ID) or "",
        client_email=os.getenv(ENV_CLIENT_EMAIL) or "",
        private_key=(os.getenv(ENV_PRIVATE_KEY) or "").replace("\\n", "\n"),
        default_date_range=os.getenv(ENV_DEFAULT_DATE_RANGE) or DEFAULT_DATE_RANGE,
        results_dir=Path(os.getenv(ENV_RESULTS_DIR) or RESULTS_DIR),
        site_url=os.getenv(ENV_SITE_URL) or "",
    )


def validate_settings(settings: Settings | None = None) -> ValidationResult:
    settings = settings or get_settings()
    errors: list[str] = []

    if not settings.property_id:
        errors.append(f"{ENV_PROPERTY_ID} is required")
    if not settings.client_email:
        errors.append(f"{ENV_CLIENT_EMAIL} is required")
    if not settings.private_key:
        errors.append(f"{ENV_PRIVATE_KEY} is required")

    return ValidationResult(valid=not errors, errors=errors)


def service_account_credentials(settings: Settings, scopes: Iterable[str]) -> service_account.Credentials:
    info = {
        "type": "service_account",
        "client_email": settings.client_email,
        "private_key": settings.private_key,
        "token_uri": GOOGLE_TOKEN_URI,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=sorted(set(scopes)))


load_env()
