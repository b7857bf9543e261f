import pytest
from listing_catalog.parsing.listing import ListingParser
from listing_catalog.metadata.extract import MetadataExtractor
from listing_catalog.models import FileRecord

BASE_URL = "https://www.example.org/special/jackson/"

# Trimmed copy of an Apache 2.4 FancyIndexing page
SAMPLE_LISTING = """<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 3.2 Final//EN">
<html>
 <head>
  <title>Index of /special/jackson</title>
 </head>
 <body>
<h1>Index of /special/jackson</h1>
<pre><img src="/icons/blank.gif" alt="Icon "> <a href="?C=N;O=D">Name</a>                    <a href="?C=M;O=A">Last modified</a>      <a href="?C=S;O=A">Size</a>  <a href="?C=D;O=A">Description</a>
<img src="/icons/back.gif" alt="[PARENTDIR]"> <a href="/special/">Parent Directory</a>                             -
<img src="/icons/layout.gif" alt="[   ]"> <a href="TJ003.pdf">TJ003.pdf</a>               2021-05-12 14:30  250K
<img src="/icons/folder.gif" alt="[DIR]"> <a href="Rachel_Gain/">Rachel_Gain/</a>            2020-11-03 09:15    -
<img src="/icons/movie.gif" alt="[VID]"> <a href="clip.mp4">clip.mp4</a>                2022-01-20 08:00  1.5M
<img src="/icons/layout.gif" alt="[   ]"> <a href="Motion_to_Dismiss.pdf">Motion_to_Dismiss.pdf</a>   2021-02-01 10:00   88K
<img src="/icons/layout.gif" alt="[   ]"> <a href="report.PDF">report.PDF</a>              2019-07-04 12:00   512
<img src="/icons/compressed.gif" alt="[   ]"> <a href="archive.zip">archive.zip</a>             2018-03-03 03:03  2G
<img src="/icons/text.gif" alt="[TXT]"> <a href="notes">notes</a>
</pre>
<hr>
<address>Apache/2.4.57 Server at www.example.org Port 443</address>
</body></html>
"""

SAMPLE_FILENAMES = [
    "TJ003.pdf",
    "Rachel_Gain/",
    "clip.mp4",
    "Motion_to_Dismiss.pdf",
    "report.PDF",
    "archive.zip",
    "notes",
]


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def sample_html():
    return SAMPLE_LISTING


@pytest.fixture
def entries(sample_html):
    """RawEntries parsed from the sample listing."""
    return ListingParser().parse(sample_html, BASE_URL)


@pytest.fixture
def records(entries):
    """FileRecords extracted from the sample listing, in listing order."""
    return MetadataExtractor().extract_all(entries)


@pytest.fixture
def make_record():
    """Factory for hand-built records with sensible defaults."""
    def _make(filename, **overrides):
        values = dict(
            id=filename,
            filename=filename,
            display_name=filename,
            url=BASE_URL + filename,
            type="document",
            person="Unknown",
            date="Unknown",
            size="Unknown",
            size_bytes=0,
            keywords=frozenset(),
        )
        values.update(overrides)
        return FileRecord(**values)
    return _make
