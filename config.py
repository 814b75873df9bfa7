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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ledger.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Calendar boundaries (day/week/month/year) are computed in this fixed offset
    PH_UTC_OFFSET_HOURS = data.get("PH_UTC_OFFSET_HOURS", 8)

    # Payment statuses that count as credits on the order ledger
    LEDGER_CREDIT_STATUSES = tuple(data.get("LEDGER_CREDIT_STATUSES", ["received"]))

    # Customer notifications on payment review
    PAYMENT_NOTIFICATION_WEBHOOK = data.get("PAYMENT_NOTIFICATION_WEBHOOK", None)

    # Ledger statement header
    COMPANY_NAME = data.get("COMPANY_NAME", "Hardware Distribution Co.")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "Metro Manila, Philippines")
