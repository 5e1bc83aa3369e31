import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeguard"),
}

STORE_LATENCY_MS = int(os.getenv("STORE_LATENCY_MS", "500"))

QR_TOKEN = os.getenv("QR_TOKEN", "TIMEGUARD_OFFICE_CHECKIN")

IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
IP_LOOKUP_TIMEOUT_SECONDS = float(os.getenv("IP_LOOKUP_TIMEOUT_SECONDS", "10"))
GEOLOCATION_TIMEOUT_SECONDS = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
