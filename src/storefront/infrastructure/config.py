"""Environment-driven configuration for the storefront."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8080/api"


@dataclass(slots=True)
class Settings:
    api_url: str
    api_token: str | None
    data_dir: Path
    payment_adapter: str
    http_timeout: float
    log_level: str

    @property
    def cart_file(self) -> Path:
        return self.data_dir / "cart.json"


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    api_url = os.getenv("STOREFRONT_API_URL", DEFAULT_API_URL).strip().rstrip("/")
    token = os.getenv("STOREFRONT_API_TOKEN", "").strip() or None

    data_dir = os.getenv("STOREFRONT_DATA_DIR")
    if data_dir:
        data_path = Path(data_dir).expanduser()
    else:
        data_path = Path.home() / ".storefront"

    try:
        timeout = float(os.getenv("STOREFRONT_HTTP_TIMEOUT", "15"))
    except ValueError as exc:
        raise ValueError("STOREFRONT_HTTP_TIMEOUT must be a number of seconds") from exc

    return Settings(
        api_url=api_url or DEFAULT_API_URL,
        api_token=token,
        data_dir=data_path,
        payment_adapter=os.getenv("STOREFRONT_PAYMENT_ADAPTER", "mock").strip().lower(),
        http_timeout=timeout,
        log_level=os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").strip().upper(),
    )
