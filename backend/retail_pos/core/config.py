"""
Centralized application configuration
"""
import json
from decimal import Decimal
from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent

# Business constants shared by the engines
TAX_RATE = Decimal("0.10")
LOW_STOCK_THRESHOLD = 20
DEFAULT_SHOP_PASSWORD = "shop123"
ADMIN_SHOP_ID = 0
ORDER_NUMBER_FORMAT = "ORD-{year}-{id:04d}"


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_TITLE: str = "Retail POS API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Order and inventory engine for retail shops"
    API_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Data source: "local" keeps collections in JSON files, "remote" talks to the REST API
    DATA_SOURCE: Literal["local", "remote"] = "local"
    CACHE_DIR: Path = Path(".pos_cache")
    SEED_DIR: Path = PACKAGE_DIR / "seed_data"
    SESSION_FILE: Path = Path(".pos_cache/session.json")

    REMOTE_API_URL: str = "http://localhost:5000/api"
    REMOTE_API_TOKEN: Optional[str] = None
    REMOTE_TIMEOUT: float = 30.0

    # Authentication
    AUTH_SOURCE: Literal["local", "remote"] = "local"
    AUTH_SECRET: Optional[str] = None
    ADMIN_EMAIL: str = "admin@cxp.com"
    ADMIN_PASSWORD: str = "Admin123!"

    # Inventory
    DECREMENT_STOCK_ON_COMPLETION: bool = True

    # CORS - comma-separated string or JSON array
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:4200"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:4200"]

        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


def get_settings() -> Settings:
    return Settings()
