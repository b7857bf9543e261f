"""
Custom exception hierarchy for the listing catalog.

The core never raises for a single bad listing row; these types mark the
boundaries where a whole operation can fail.
"""


class ListingCatalogError(Exception):
    """Base exception for all listing catalog errors."""
    pass


class ListingParseError(ListingCatalogError):
    """Raised when a single listing entry cannot be turned into a RawEntry."""
    pass


class MetadataExtractionError(ListingCatalogError):
    """Raised when metadata cannot be derived for a listing entry."""
    pass


class QueryError(ListingCatalogError):
    """Raised for an unknown sort key or sort order."""
    pass


class FetchError(ListingCatalogError):
    """Raised when every fetch endpoint failed."""

    def __init__(self, message: str, failures=None):
        super().__init__(message)
        self.failures = list(failures or [])
