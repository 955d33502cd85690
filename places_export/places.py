"""
Core module for searching and retrieving place data from Google Maps API.
"""
import time
import logging
import googlemaps
from googlemaps.exceptions import ApiError, HTTPError, Timeout, TransportError
from typing import Optional
from concurrent.futures import ThreadPoolExecutor, as_completed

from .config import (
    DETAIL_FIELDS,
    DETAIL_MAX_WORKERS,
    MAX_PAGES,
    PAGE_TOKEN_DELAY,
    SEARCH_RADIUS_METERS,
)
from .exceptions import LocationNotFound, Misconfigured, UpstreamError
from .models import Place, SearchPage

logger = logging.getLogger(__name__)

# ZERO_RESULTS is an empty page, not a failure, so an empty search ends in "no results"
SUCCESS_STATUSES = ('OK', 'ZERO_RESULTS')


def raise_for_server_error(response, *args, **kwargs):
    """
    requests response hook: raise on 5xx before googlemaps can retry it.

    The client wraps the raised HTTPError in a TransportError. Only the status
    code is reported; the request URL carries the API key.
    """
    if response.status_code >= 500:
        raise HTTPError(response.status_code)
    return response


def create_client(api_key: str) -> googlemaps.Client:
    """
    Build a Google Maps client for one search.

    Nothing is retried: over-query-limit responses and 5xx answers both fail
    the call immediately.

    Raises:
        Misconfigured: If the key is missing or rejected by the client library
    """
    if not api_key:
        raise Misconfigured("Google Maps API key is not configured")
    try:
        return googlemaps.Client(
            key=api_key,
            retry_over_query_limit=False,
            requests_kwargs={'hooks': {'response': raise_for_server_error}}
        )
    except ValueError as e:
        raise Misconfigured(f"Invalid Google Maps API key: {e}") from e


def geocode_location(gmaps_client: googlemaps.Client, location: str) -> tuple:
    """
    Convert a location string to latitude/longitude coordinates.

    Args:
        gmaps_client: Initialized Google Maps client
        location: Address, city, or location string

    Returns:
        Tuple of (latitude, longitude) for the first candidate

    Raises:
        LocationNotFound: If the geocoder fails or returns no candidate
    """
    try:
        geocode_result = gmaps_client.geocode(location)
    except ApiError as e:
        raise LocationNotFound(
            f"Could not find the specified location: {location} ({e.status})",
            status=e.status
        ) from e
    except TransportError as e:
        raise LocationNotFound(
            f"Could not find the specified location: {location} ({e})"
        ) from e
    except Timeout as e:
        raise LocationNotFound(
            f"Could not find the specified location: {location} (request timed out)"
        ) from e

    if not geocode_result:
        raise LocationNotFound(
            f"Could not find the specified location: {location} (ZERO_RESULTS)",
            status='ZERO_RESULTS'
        )

    lat_lng = geocode_result[0]['geometry']['location']
    return (lat_lng['lat'], lat_lng['lng'])


def search_nearby(
    gmaps_client: googlemaps.Client,
    coordinates: Optional[tuple] = None,
    keyword: Optional[str] = None,
    page_token: Optional[str] = None,
    radius: int = SEARCH_RADIUS_METERS
) -> SearchPage:
    """
    Fetch one page of Nearby Search results.

    With a page token only the token is sent; coordinates and keyword are
    ignored, as the token already encodes the original query.

    Args:
        gmaps_client: Initialized Google Maps client
        coordinates: Tuple of (latitude, longitude) for the first page
        keyword: Service type keyword for the first page
        page_token: Token from the previous page
        radius: Search radius in meters

    Returns:
        SearchPage with the raw result records and the next page token

    Raises:
        UpstreamError: If the request fails or the status is not successful
    """
    try:
        if page_token:
            response = gmaps_client.places_nearby(page_token=page_token)
        else:
            response = gmaps_client.places_nearby(
                location=coordinates,
                radius=radius,
                keyword=keyword
            )
    except ApiError as e:
        raise UpstreamError(f"Google Places API error: {e.status}", status=e.status) from e
    except TransportError as e:
        raise UpstreamError(f"Google Places API error: {e}") from e
    except Timeout as e:
        raise UpstreamError("Google Places API error: request timed out") from e

    status = response.get('status', 'OK')
    if status not in SUCCESS_STATUSES:
        raise UpstreamError(f"Google Places API error: {status}", status=status)

    return SearchPage(
        results=response.get('results', []),
        next_page_token=response.get('next_page_token'),
        status=status
    )


def get_place_details(
    gmaps_client: googlemaps.Client,
    place_id: str,
    fields: Optional[list] = None
) -> dict:
    """
    Get detailed information for a specific place.

    Args:
        gmaps_client: Initialized Google Maps client
        place_id: The Google Place ID
        fields: List of fields to retrieve (defaults to website, phone, address)

    Returns:
        Dictionary of place details

    Raises:
        UpstreamError: If the lookup fails
    """
    if fields is None:
        fields = DETAIL_FIELDS

    try:
        result = gmaps_client.place(place_id=place_id, fields=fields)
    except ApiError as e:
        raise UpstreamError(f"Place Details error for {place_id}: {e.status}", status=e.status) from e
    except TransportError as e:
        raise UpstreamError(f"Place Details error for {place_id}: {e}") from e
    except Timeout as e:
        raise UpstreamError(f"Place Details error for {place_id}: request timed out") from e
    return result.get('result', {})


def enrich_page(
    gmaps_client: googlemaps.Client,
    results: list,
    max_workers: int = DETAIL_MAX_WORKERS
) -> list:
    """
    Fetch Place Details for every record of a page concurrently.

    A failed lookup never aborts the page: the record is kept with empty
    website and phone and its vicinity as the address.

    Args:
        gmaps_client: Initialized Google Maps client
        results: Raw Nearby Search records
        max_workers: Number of concurrent detail lookups

    Returns:
        List of Place in the same order as results
    """
    if not results:
        return []

    places = [None] * len(results)

    def fetch_for_result(index_result):
        idx, result = index_result
        try:
            details = get_place_details(gmaps_client, result['place_id'])
        except Exception as e:
            logger.warning(f"Error fetching details for {result.get('name', result.get('place_id'))}: {e}")
            details = None
        return idx, Place.from_result(result, details)

    with ThreadPoolExecutor(max_workers=min(max_workers, len(results))) as executor:
        futures = [
            executor.submit(fetch_for_result, ir)
            for ir in enumerate(results)
        ]

        for future in as_completed(futures):
            idx, place = future.result()
            places[idx] = place

    return places


def fetch_all_places(
    gmaps_client: googlemaps.Client,
    service_type: str,
    location: str,
    max_pages: int = MAX_PAGES,
    page_delay: float = PAGE_TOKEN_DELAY,
    radius: int = SEARCH_RADIUS_METERS,
    max_workers: int = DETAIL_MAX_WORKERS,
    progress_callback: callable = None
) -> list:
    """
    Search for places near a location, following pagination.

    Args:
        gmaps_client: Initialized Google Maps client
        service_type: Keyword to search for (e.g., "dentist")
        location: Search center location (address, city, etc.)
        max_pages: Maximum number of result pages to fetch
        page_delay: Seconds to wait before requesting a page by token
        radius: Search radius in meters
        max_workers: Number of concurrent detail lookups per page
        progress_callback: Optional callback(page_number, page_count)

    Returns:
        List of Place in page-then-record order, possibly empty
    """
    coordinates = geocode_location(gmaps_client, location)
    logger.info(f"Geocoded '{location}' to {coordinates}")

    all_places = []
    next_page_token = None
    page_number = 0

    while page_number < max_pages:
        if next_page_token:
            # Page tokens take a moment to become valid upstream
            time.sleep(page_delay)

        page = search_nearby(
            gmaps_client,
            coordinates=coordinates,
            keyword=service_type,
            page_token=next_page_token,
            radius=radius
        )
        page_number += 1

        all_places.extend(enrich_page(gmaps_client, page.results, max_workers=max_workers))
        logger.info(f"Page {page_number}: {len(page.results)} results for '{service_type}'")

        if progress_callback:
            progress_callback(page_number, len(page.results))

        next_page_token = page.next_page_token
        if not next_page_token:
            break

    return all_places
