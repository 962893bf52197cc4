# ===== CONFIGURATION & CONSTANTS =====
import os

# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "25"))

# --- Upstream (IGDB) ---
IGDB_BASE_URL = os.getenv("IGDB_BASE_URL", "https://api.igdb.com/v4")
IGDB_HEADERS = {
    'Accept': 'application/json',
}

# --- Identity provider (Twitch OAuth2 client credentials) ---
TWITCH_TOKEN_URL = os.getenv("TWITCH_TOKEN_URL", "https://id.twitch.tv/oauth2/token")
TWITCH_CLIENT_ID = os.getenv("TWITCH_CLIENT_ID")
TWITCH_CLIENT_SECRET = os.getenv("TWITCH_CLIENT_SECRET")
TOKEN_REFRESH_MARGIN = 60  # seconds before expiry at which a token is considered stale

# --- Admission control (IGDB allows 4 requests/second, 8 open requests) ---
RATE_LIMIT_CAPACITY = 4
RATE_LIMIT_REFILL_PER_SECOND = 4.0
MAX_IN_FLIGHT = 8
ADMISSION_POLL_INTERVAL = 0.1

# --- Retry policy ---
MAX_RETRIES = 3
HTTP_BACKOFF_BASE = 0.5
TRANSPORT_BACKOFF_BASE = 0.3
MAX_RETRY_AFTER = 30  # upper bound on a server-requested Retry-After delay, in seconds

# --- Response cache ---
TRENDING_CACHE_TTL = 60

# --- Pagination ---
DEFAULT_PAGE_LIMIT = 12
MAX_PAGE_LIMIT = 50
MAX_BULK_IDS = 50

# --- Image size tokens ---
LIST_IMAGE_SIZE = "t_cover_big"
DETAIL_COVER_SIZE = "t_original"
SCREENSHOT_SIZE = "t_1080p"
PLATFORM_LOGO_SIZE = "t_logo_med"

# --- Cache-Control directives per request mode ---
NO_STORE = "no-store"
CACHE_CONTROL_BY_MODE = {
    "search": NO_STORE,
    "discover": NO_STORE,
    "multi": NO_STORE,
    "trending": "s-maxage=21600, stale-while-revalidate=86400",
    "taxonomy": "s-maxage=86400",
    "bulk": "s-maxage=3600",
    "detail": "s-maxage=3600",
    "recommend": "s-maxage=3600",
}

# --- IGDB popularity primitives (type 1 = page visits) ---
POPULARITY_TYPE = 1
