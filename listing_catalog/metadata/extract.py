import base64
import logging
import math
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple
from urllib.parse import unquote

from tqdm import tqdm

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import FileRecord, RawEntry
from .people import PersonMatcher

EXT_RE = re.compile(r'\.[^.]+$')
NON_ALNUM_RE = re.compile(r'[^a-zA-Z0-9]')
KEYWORD_SPLIT_RE = re.compile(r'[^a-z0-9\s]')
WHITESPACE_RE = re.compile(r'\s+')


class MetadataExtractor:
    """
    Derives a FileRecord from a RawEntry.

    Everything here is computed from the listing alone (anchor text, href and
    the row's trailing columns); nothing is fetched.
    """

    def __init__(self, person_matcher: Optional[PersonMatcher] = None):
        self.people = person_matcher or PersonMatcher()
        self.date_re = re.compile(config.DATE_PATTERN)
        self.size_re = re.compile(config.SIZE_PATTERN)

    def extract(self, entry: RawEntry) -> Optional[FileRecord]:
        """
        Builds the record for one entry. Returns None (and logs) instead of
        raising, so one malformed row never sinks the batch.
        """
        try:
            return self._build_record(entry)
        except Exception as e:
            logging.warning(f"Failed to parse file metadata for {entry.filename!r}: {e}")
            return None

    def extract_all(self, entries: Iterable[RawEntry], show_progress: bool = False) -> List[FileRecord]:
        """
        Extracts every entry, dropping failures. Ids that collide inside this
        batch get a numeric suffix so they stay unique.
        """
        records: List[FileRecord] = []
        seen_ids = {}
        skipped = 0

        for entry in tqdm(entries, desc="Extracting", unit="file", disable=not show_progress):
            record = self.extract(entry)
            if record is None:
                skipped += 1
                continue

            count = seen_ids.get(record.id, 0)
            seen_ids[record.id] = count + 1
            if count:
                new_id = f"{record.id}-{count}"
                logging.debug(f"Duplicate id {record.id} for {record.filename!r}; using {new_id}")
                record = replace(record, id=new_id)

            records.append(record)

        if skipped:
            logging.info(f"Skipped {skipped} unparseable entries.")

        return records

    def _build_record(self, entry: RawEntry) -> FileRecord:
        if not entry.filename:
            raise MetadataExtractionError("entry has no visible filename")

        date, size, size_bytes = self.parse_listing_line(entry.row_text, entry.filename)
        file_type = determine_file_type(entry.filename, entry.href)
        person = self.people.infer(strip_extension(entry.filename))

        return FileRecord(
            id=generate_file_id(entry.filename, entry.href),
            filename=entry.filename,
            display_name=clean_display_name(entry.filename),
            url=entry.url,
            type=file_type,
            person=person,
            date=date,
            size=size,
            size_bytes=size_bytes,
            keywords=generate_keywords(entry.filename, file_type, person),
        )

    def parse_listing_line(self, line_text: str, filename: str) -> Tuple[str, str, int]:
        """
        Reads the date and size columns that follow the filename in a row.

        Returns:
            (date, size, size_bytes)
        """
        idx = line_text.find(filename) if line_text else -1
        if idx == -1:
            return config.UNKNOWN, config.UNKNOWN, 0

        after = line_text[idx + len(filename):]

        date_match = self.date_re.search(after)
        date = date_match.group(1) if date_match else config.UNKNOWN

        size_match = self.size_re.search(after)
        if not size_match:
            return date, config.UNKNOWN, 0

        token = size_match.group(1)
        if token == '-':
            return date, config.DIRECTORY, 0

        return date, token, size_to_bytes(token)


def size_to_bytes(token: str) -> int:
    """'1.5M' -> 1572864. Bare numbers are already bytes."""
    num_match = re.match(r'^(\d+(?:\.\d+)?)', token)
    if not num_match:
        return 0

    num = float(num_match.group(1))
    multiplier = config.SIZE_MULTIPLIERS.get(token[-1].upper(), 1)
    return int(math.floor(num * multiplier))


def strip_extension(filename: str) -> str:
    return EXT_RE.sub('', filename)


def determine_file_type(filename: str, href: str) -> str:
    # Folders end with / in directory listings
    if href.endswith('/'):
        return config.FOLDER_TYPE

    ext = filename.split('.')[-1].lower()
    return config.EXT_TO_TYPE.get(ext, config.DEFAULT_TYPE)


def generate_file_id(filename: str, href: str) -> str:
    encoded = base64.b64encode((filename + href).encode('utf-8')).decode('ascii')
    return NON_ALNUM_RE.sub('', encoded)[:config.ID_LENGTH]


def clean_display_name(filename: str) -> str:
    clean = unquote(filename)
    clean = strip_extension(clean)
    clean = clean.replace('_', ' ')
    return WHITESPACE_RE.sub(' ', clean).strip()


def generate_keywords(filename: str, file_type: str, person: str) -> frozenset:
    lowered = filename.lower()
    keywords = set()

    for word in KEYWORD_SPLIT_RE.sub(' ', lowered).split():
        if len(word) >= config.MIN_KEYWORD_LENGTH:
            keywords.add(word)

    keywords.add(file_type)

    if person != config.UNKNOWN:
        keywords.update(person.lower().split())

    for term, expansions in config.DOMAIN_TERMS:
        if term in lowered:
            keywords.update(expansions)

    return frozenset(keywords)

