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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_URL = data.get("APP_URL", "http://localhost:3000")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Shared secret for cron-triggered job endpoints (Authorization: Bearer <secret>)
    CRON_SECRET = data.get("CRON_SECRET", "")

    # Recurring invoice scheduler
    RECURRING_INVOICES_ENABLED = bool(data.get("RECURRING_INVOICES_ENABLED", True))
    RECURRING_INTERVAL_SECONDS = data.get("RECURRING_INTERVAL_SECONDS", 86400)  # Daily

    # Revolut Business integration
    REVOLUT_CLIENT_ID = data.get("REVOLUT_CLIENT_ID", "")
    REVOLUT_SANDBOX = bool(data.get("REVOLUT_SANDBOX", True))
    REVOLUT_REDIRECT_URI = data.get(
        "REVOLUT_REDIRECT_URI", f"{APP_URL}/api/revolut/callback"
    )
    REVOLUT_ENCRYPTION_KEY = data.get("REVOLUT_ENCRYPTION_KEY", "")
    REVOLUT_SYNC_ENABLED = bool(data.get("REVOLUT_SYNC_ENABLED", True))
    REVOLUT_SYNC_DAYS = data.get("REVOLUT_SYNC_DAYS", 30)
    REVOLUT_SYNC_INTERVAL_SECONDS = data.get("REVOLUT_SYNC_INTERVAL_SECONDS", 21600)  # 6 hours
