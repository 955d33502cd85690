"""
Configuration and constants for the Places Export service.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Search Settings
_search_radius = os.getenv("SEARCH_RADIUS_METERS", "5000")
try:
    SEARCH_RADIUS_METERS = int(_search_radius)
except ValueError:
    SEARCH_RADIUS_METERS = 5000

# Pagination - Google caps nearby search at 3 pages (60 results)
_max_pages = os.getenv("MAX_PAGES", "3")
try:
    MAX_PAGES = int(_max_pages)
except ValueError:
    MAX_PAGES = 3

# Seconds to wait before a request carrying a page token; the token
# is not valid upstream until a short while after it is issued.
_page_token_delay = os.getenv("PAGE_TOKEN_DELAY", "2")
try:
    PAGE_TOKEN_DELAY = float(_page_token_delay)
except ValueError:
    PAGE_TOKEN_DELAY = 2

# Place Details lookups run concurrently per page
DETAIL_MAX_WORKERS = int(os.getenv("DETAIL_MAX_WORKERS", "10"))
DETAIL_FIELDS = ['website', 'formatted_phone_number', 'formatted_address']

# Export Settings
EXPORT_FILENAME = os.getenv("EXPORT_FILENAME", "places.xlsx")
SHEET_NAME = "Places"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
RESULTS_COUNT_HEADER = "X-Results-Count"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_api_key():
    """Read the Google Maps API key at request time."""
    return os.getenv("GOOGLE_MAPS_API_KEY")
