# ===== CONFIGURATION & CONSTANTS =====
import os

# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CACHE_DIR = os.getenv("STEAM_TOOLKIT_CACHE_DIR", "cache")
CACHE_NAMESPACE = "steam-app"
EXPORT_TOOL_NAME = "Steam Data Toolkit"

# --- Web Scraping & API Headers ---
COMMON_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept': 'application/json, text/plain, */*',
    'Accept-Encoding': 'gzip, deflate, br',
    'Connection': 'keep-alive'
}

# --- HTTP Transport ---
REQUEST_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
RETRY_INITIAL_DELAY = 1.0  # seconds, doubled on each attempt
RETRYABLE_STATUSES = {403, 429, 500, 502, 503, 504}

# --- Steam Storefront API ---
STEAM_APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"
APPDETAILS_FILTERS = "basic,price_overview,package_groups,platforms,release_date,developers,publishers,dlc"
STORE_COUNTRY = "us"
STORE_LANGUAGE = "english"
STEAM_STORE_APP_URL = "https://store.steampowered.com/app/{app_id}/"

# --- SteamDB Page ---
STEAMDB_APP_URL = "https://steamdb.info/app/{app_id}/"
LIVE_PAGE_POLL_INTERVAL = 1.5  # seconds between re-scrapes of a live page
LIVE_PAGE_NAVIGATION_TIMEOUT = 90000  # milliseconds
UNKNOWN_APP_MARKER = "SteamDB Unknown App"

# --- Display ---
MAX_DISPLAY_ENTRIES = 200
