"""
Data containers for search requests and exported places.
"""
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import InvalidInput

# Generic tags Google attaches to nearly every result
GENERIC_PLACE_TYPES = ('point_of_interest', 'establishment')


@dataclass(frozen=True)
class SearchRequest:
    """A validated service-type keyword and location pair."""
    service_type: str
    location: str

    def __post_init__(self):
        if not isinstance(self.service_type, str) or not self.service_type.strip():
            raise InvalidInput("Service type and location are required")
        if not isinstance(self.location, str) or not self.location.strip():
            raise InvalidInput("Service type and location are required")
        object.__setattr__(self, 'service_type', self.service_type.strip())
        object.__setattr__(self, 'location', self.location.strip())

    @classmethod
    def from_payload(cls, payload) -> "SearchRequest":
        """
        Build a request from the JSON body of the search endpoint.

        Args:
            payload: Decoded JSON body with 'serviceType' and 'location' keys

        Returns:
            Validated SearchRequest

        Raises:
            InvalidInput: If the body is not an object or a field is missing/empty
        """
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")
        return cls(
            service_type=payload.get('serviceType'),
            location=payload.get('location'),
        )


@dataclass(frozen=True)
class SearchPage:
    """One page of Nearby Search results."""
    results: list
    next_page_token: Optional[str] = None
    status: str = 'OK'


@dataclass(frozen=True)
class Place:
    """A nearby search result merged with its Place Details."""
    place_id: str
    name: str
    vicinity: str = ''
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    types: tuple = field(default_factory=tuple)
    website: str = ''
    phone: str = ''
    formatted_address: str = ''

    @property
    def address(self) -> str:
        return self.formatted_address or self.vicinity

    @property
    def has_website(self) -> bool:
        return bool(self.website)

    @property
    def business_type(self) -> str:
        """Category tags without the generic ones, underscores as spaces."""
        return ', '.join(
            tag.replace('_', ' ')
            for tag in self.types
            if tag not in GENERIC_PLACE_TYPES
        )

    @classmethod
    def from_result(cls, result: dict, details: Optional[dict] = None) -> "Place":
        """
        Merge a Nearby Search record with an optional Place Details record.

        Detail fields default to empty strings and the address falls back to
        the search record's vicinity when details are missing.
        """
        details = details or {}
        vicinity = result.get('vicinity', '')
        return cls(
            place_id=result['place_id'],
            name=result.get('name', ''),
            vicinity=vicinity,
            rating=result.get('rating'),
            user_ratings_total=result.get('user_ratings_total'),
            types=tuple(result.get('types', [])),
            website=details.get('website') or '',
            phone=details.get('formatted_phone_number') or '',
            formatted_address=details.get('formatted_address') or vicinity,
        )
