import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps collections in process; "mysql" uses the kv_store table
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeguard"),
}

# Simulated round-trip on every store call
STORE_LATENCY_MS = int(os.getenv("STORE_LATENCY_MS", "500"))

# Office QR code payload accepted for check-in
QR_TOKEN = os.getenv("QR_TOKEN", "TIMEGUARD_OFFICE_CHECKIN")

IP_LOOKUP_URL = os.getenv("IP_LOOKUP_URL", "https://api.ipify.org?format=json")
IP_LOOKUP_TIMEOUT_SECONDS = float(os.getenv("IP_LOOKUP_TIMEOUT_SECONDS", "10"))
GEOLOCATION_TIMEOUT_SECONDS = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))

DEBUG = True

# If enabled, app will create the kv_store table on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
