import pytest
from listing_catalog.core import ListingCatalogApp
from listing_catalog.exceptions import FetchError
from listing_catalog.query.state import QueryState
from conftest import BASE_URL, SAMPLE_FILENAMES


class StubFetcher:
    def __init__(self, html=None, error=None):
        self.html = html
        self.error = error
        self.refresh_flags = []

    def fetch(self, refresh=False):
        self.refresh_flags.append(refresh)
        if self.error:
            raise self.error
        return self.html


def test_load_runs_full_pipeline(sample_html):
    fetcher = StubFetcher(sample_html)
    app = ListingCatalogApp(BASE_URL, fetcher=fetcher)

    records = app.load()

    assert [r.filename for r in records] == SAMPLE_FILENAMES
    assert app.files == records
    assert fetcher.refresh_flags == [False]


def test_refresh_bypasses_cache(sample_html):
    fetcher = StubFetcher(sample_html)
    app = ListingCatalogApp(BASE_URL, fetcher=fetcher)
    app.refresh()
    assert fetcher.refresh_flags == [True]


def test_fetch_error_propagates_and_keeps_previous_files(sample_html):
    app = ListingCatalogApp(BASE_URL, fetcher=StubFetcher(sample_html))
    app.load()

    app.fetcher = StubFetcher(error=FetchError("down", ["first: boom"]))
    with pytest.raises(FetchError):
        app.load()
    assert len(app.files) == len(SAMPLE_FILENAMES)


def test_empty_listing_is_not_an_error(caplog):
    app = ListingCatalogApp(BASE_URL, fetcher=StubFetcher("<html><body>moved</body></html>"))
    assert app.load() == []
    assert "No files found" in caplog.text


def test_query_options_and_stats(sample_html):
    app = ListingCatalogApp(BASE_URL, fetcher=StubFetcher())
    app.load_html(sample_html)

    assert len(app.query()) == len(SAMPLE_FILENAMES)

    folders = app.query(QueryState(type="folder"))
    assert [r.filename for r in folders] == ["Rachel_Gain/"]

    assert "Timothy Jackson" in app.options().persons
    stats = app.stats(folders)
    assert stats.total == len(SAMPLE_FILENAMES)
    assert stats.filtered == 1


def test_to_dict_wire_shape(sample_html):
    app = ListingCatalogApp(BASE_URL, fetcher=StubFetcher())
    rec = app.load_html(sample_html)[0]
    data = rec.to_dict()

    assert set(data) == {"id", "filename", "displayName", "url", "type", "person",
                         "date", "size", "sizeBytes", "keywords"}
    assert data["sizeBytes"] == 256000
    assert data["keywords"] == sorted(data["keywords"])
