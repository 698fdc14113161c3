import os
from dotenv import load_dotenv

load_dotenv()

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '5242880'))  # 5 MB default, detail pages are large
API_KEY = os.getenv("API_KEY", "")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# Batch normalization
PARSE_WORKERS = int(os.getenv("PARSE_WORKERS", "0"))  # 0 = one per core
BATCH_SIZE_LIMIT = int(os.getenv("BATCH_SIZE_LIMIT", "50"))

# Relative links in portal pages are resolved against this when the caller gives no base URL
DEFAULT_BASE_URL = os.getenv("DEFAULT_BASE_URL", "")
