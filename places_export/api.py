"""
FastAPI application exposing the places search export.

Run with: uvicorn places_export.api:app --reload
"""
import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .config import (
    EXPORT_FILENAME,
    RESULTS_COUNT_HEADER,
    XLSX_MEDIA_TYPE,
    get_api_key,
)
from .data_utils import export_to_excel, places_to_dataframe
from .exceptions import Misconfigured, PlacesExportError
from .models import SearchRequest
from .places import create_client, fetch_all_places

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Places Export API",
    description="Search Google Places for a service type and download the results as a spreadsheet",
    version="1.0.0",
)


def _message(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def handle_search(payload: Any) -> Response:
    """
    Run one search request end to end.

    The API key and the input are both checked before any Google call is made.

    Args:
        payload: Decoded JSON body ({"serviceType": ..., "location": ...})

    Returns:
        Spreadsheet response on success, JSON {"message": ...} otherwise
    """
    try:
        api_key = get_api_key()
        if not api_key:
            raise Misconfigured("Google Maps API key is not configured")

        search_request = SearchRequest.from_payload(payload)

        gmaps = create_client(api_key)
        places = fetch_all_places(gmaps, search_request.service_type, search_request.location)

        if not places:
            logger.info(f"No places for '{search_request.service_type}' near '{search_request.location}'")
            return _message("No places found for the given criteria", 404)

        content = export_to_excel(places_to_dataframe(places), return_bytes=True)
    except PlacesExportError as e:
        logger.error(f"Search failed: {e}")
        return _message(str(e), e.status_code)
    except Exception as e:
        logger.exception("Unexpected error while processing the search")
        return _message(str(e) or "An error occurred while processing the request", 500)

    logger.info(f"Exported {len(places)} places for '{search_request.service_type}'")
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={EXPORT_FILENAME}",
            RESULTS_COUNT_HEADER: str(len(places)),
        },
    )


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    return _message("Request body must be valid JSON", 400)


@app.post("/api/search-places")
def search_places(payload: Any = Body(default=None)):
    return handle_search(payload)


@app.get("/health")
def health():
    return {"status": "ok"}
