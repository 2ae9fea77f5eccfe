"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a production deployment
override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Restroom Finder API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "restroom_finder.db")

    # Third-party address search (Kakao Local keyword search).  The key is
    # sent as ``Authorization: KakaoAK <key>``.
    address_api_url: str = os.getenv(
        "ADDRESS_API_URL", "https://dapi.kakao.com/v2/local/search/keyword.json"
    )
    address_api_key: str = os.getenv("ADDRESS_API_KEY", "")
    address_search_count: int = int(os.getenv("ADDRESS_SEARCH_COUNT", "10"))

    # Google Play receipt validation (Android Publisher API).
    google_play_api_url: str = os.getenv(
        "GOOGLE_PLAY_API_URL", "https://androidpublisher.googleapis.com/androidpublisher/v3"
    )
    google_play_package_name: str = os.getenv("GOOGLE_PLAY_PACKAGE_NAME", "com.project.restroomfinder")
    google_play_access_token: str = os.getenv("GOOGLE_PLAY_ACCESS_TOKEN", "")

    # Timeout in seconds for every outbound HTTP call.
    external_timeout: float = float(os.getenv("EXTERNAL_TIMEOUT", "10"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiated once; environment variables must be set before this
# module is imported.
settings = Settings()
