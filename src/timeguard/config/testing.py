SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "timeguard_test",
}

STORE_LATENCY_MS = 0

QR_TOKEN = "TEST_QR_TOKEN"

# Tests never reach the network; the request's remote address is used instead
IP_LOOKUP_URL = ""
IP_LOOKUP_TIMEOUT_SECONDS = 1.0
GEOLOCATION_TIMEOUT_SECONDS = 1.0

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
