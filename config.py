from dotenv import load_dotenv
from decimal import Decimal
import os
from typing import Final # So that my variables are immutable

# Load environment variables from .env file
load_dotenv(dotenv_path=".env")

# Database configuration
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./pos.db")

# JWT configuration
SECRET_KEY: Final[str] = os.getenv("SECRET_KEY", "your-secret-key-here")  # Change in production!
ALGORITHM: Final[str] = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
TOKEN_REFRESH_THRESHOLD_MINUTES: Final[int] = int(os.getenv("TOKEN_REFRESH_THRESHOLD_MINUTES", "15"))
DEBUG: Final[bool] = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")  # Convert to boolean
RATE_LIMIT_ENABLED: Final[bool] = os.getenv("RATE_LIMIT_ENABLED", "True").lower() in ("true", "1", "t")

# API / logging
API_VERSION: Final[str] = os.getenv("API_VERSION", "v1")
LANG: Final[str] = os.getenv("LANG_CODE", "en")  # en or ta
LOGLEVEL: Final[str] = os.getenv("LOGLEVEL", "INFO").upper()

# Billing
TAX_RATE: Final[Decimal] = Decimal(os.getenv("TAX_RATE", "0.05"))
CURRENCY_SYMBOL: Final[str] = os.getenv("CURRENCY_SYMBOL", "₹")
ORDER_NUMBER_PREFIX: Final[str] = os.getenv("ORDER_NUMBER_PREFIX", "ORD")

# Listings and reports
RECENT_LIMIT: Final[int] = int(os.getenv("RECENT_LIMIT", "50"))
TOP_SELLING_LIMIT: Final[int] = int(os.getenv("TOP_SELLING_LIMIT", "10"))
DEFAULT_MIN_STOCK_LEVEL: Final[int] = int(os.getenv("DEFAULT_MIN_STOCK_LEVEL", "5"))

# Assistant: the delay is purely cosmetic
ASSISTANT_REPLY_DELAY_SECONDS: Final[float] = float(os.getenv("ASSISTANT_REPLY_DELAY_SECONDS", "1.0"))

# QR menu payloads point here
QR_MENU_BASE_URL: Final[str] = os.getenv("QR_MENU_BASE_URL", "http://localhost:8501/menu")

# Dashboard -> API
API_BASE_URL: Final[str] = os.getenv("API_BASE_URL", f"http://localhost:8000/api/{API_VERSION}")
