import os
from pathlib import Path

APP_TITLE = "MapScraper"
APP_SUBTITLE = "Data Extraction"

APIFY_API_BASE = os.environ.get("APIFY_API_BASE", "https://api.apify.com/v2").rstrip("/")
DEFAULT_ACTOR_ID = "automateitplease~free-basic-google-maps-scraper"

REQUEST_TIMEOUT_S = 30
PREVIEW_LIMIT = 10
DEFAULT_MAX_RESULTS = 20
EXPORT_FORMATS = ("json", "csv", "xlsx", "xml")

PROJECT_ROOT = Path(__file__).resolve().parents[2]  # mapscraper/
ASSETS_DIR = PROJECT_ROOT / "assets"
LOGO_PATH = ASSETS_DIR / "logo.png"

PAGE_ICON = str(LOGO_PATH) if LOGO_PATH.exists() else "🗺️"


def get_apify_token() -> str:
    # read on every call so a token exported after startup is picked up
    return (os.environ.get("APIFY_TOKEN") or "").strip()


def get_actor_id() -> str:
    return (os.environ.get("APIFY_ACTOR_ID") or "").strip() or DEFAULT_ACTOR_ID
