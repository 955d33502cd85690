"""
Places Export - Find businesses by service type and export them to a spreadsheet.

This package provides tools for:
- Geocoding a location and running a paginated Google Places nearby search
- Enriching each result with website, phone and address details
- Exporting data to Excel/CSV
- Serving the search as an HTTP endpoint that returns the spreadsheet
"""

from .config import (
    MAX_PAGES,
    PAGE_TOKEN_DELAY,
    SEARCH_RADIUS_METERS,
)

from .exceptions import (
    PlacesExportError,
    InvalidInput,
    Misconfigured,
    LocationNotFound,
    UpstreamError,
)

from .models import (
    Place,
    SearchPage,
    SearchRequest,
)

from .places import (
    create_client,
    geocode_location,
    search_nearby,
    get_place_details,
    enrich_page,
    fetch_all_places,
)

from .data_utils import (
    places_to_dataframe,
    export_to_excel,
    export_to_csv,
    get_summary_stats,
)

__version__ = '1.0.0'

__all__ = [
    # Config
    'MAX_PAGES',
    'PAGE_TOKEN_DELAY',
    'SEARCH_RADIUS_METERS',
    # Errors
    'PlacesExportError',
    'InvalidInput',
    'Misconfigured',
    'LocationNotFound',
    'UpstreamError',
    # Models
    'Place',
    'SearchPage',
    'SearchRequest',
    # Places
    'create_client',
    'geocode_location',
    'search_nearby',
    'get_place_details',
    'enrich_page',
    'fetch_all_places',
    # Data
    'places_to_dataframe',
    'export_to_excel',
    'export_to_csv',
    'get_summary_stats',
]
