"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

USERS_KEY = "timeguard_users"
LOGS_KEY = "timeguard_logs"
SESSION_KEY = "timeguard_session"

DEFAULT_STORE_LATENCY_MS = 500
DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"
DEFAULT_IP_LOOKUP_TIMEOUT_SECONDS = 10
DEFAULT_GEOLOCATION_TIMEOUT_SECONDS = 10

IP_UNAVAILABLE = "Unavailable"
DEFAULT_QR_TOKEN = "TIMEGUARD_OFFICE_CHECKIN"
