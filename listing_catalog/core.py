import logging
from typing import List, Optional, Sequence

from .fetching.client import ListingFetcher
from .metadata.extract import MetadataExtractor
from .models import FileRecord, FilterOptions, FilterStats
from .parsing.listing import ListingParser
from .query import engine
from .query.state import QueryState
from . import config


class ListingCatalogApp:
    def __init__(self,
                 base_url: str = config.DEFAULT_BASE_URL,
                 fetcher: Optional[ListingFetcher] = None,
                 parser: Optional[ListingParser] = None,
                 extractor: Optional[MetadataExtractor] = None):
        self.base_url = base_url
        self.fetcher = fetcher or ListingFetcher(base_url)
        self.parser = parser or ListingParser()
        self.extractor = extractor or MetadataExtractor()
        self.files: List[FileRecord] = []

    def load(self, refresh: bool = False, show_progress: bool = False) -> List[FileRecord]:
        """
        Fetch -> Parse -> Extract. Replaces the in-memory record set.
        FetchError propagates; parse problems never do.
        """
        html = self.fetcher.fetch(refresh=refresh)
        return self.load_html(html, show_progress=show_progress)

    def refresh(self, show_progress: bool = False) -> List[FileRecord]:
        return self.load(refresh=True, show_progress=show_progress)

    def load_html(self, html: str, show_progress: bool = False) -> List[FileRecord]:
        logging.debug(f"Raw HTML length: {len(html or '')}")

        entries = self.parser.parse(html, self.base_url)
        records = self.extractor.extract_all(entries, show_progress=show_progress)

        if not records:
            logging.warning("No files found in directory listing.")
        else:
            logging.info(f"Loaded {len(records)} files from {self.base_url}")

        self.files = records
        return records

    def query(self, state: Optional[QueryState] = None) -> List[FileRecord]:
        return engine.apply_query(self.files, state or QueryState())

    def options(self) -> FilterOptions:
        return engine.filter_options(self.files)

    def stats(self, filtered: Optional[Sequence[FileRecord]] = None) -> FilterStats:
        return engine.filter_stats(self.files, self.files if filtered is None else filtered)
