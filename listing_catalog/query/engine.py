"""
Search, filter and sort over an immutable sequence of FileRecords.

Every function returns a new list and leaves its input untouched.
"""
import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from .. import config
from ..exceptions import QueryError
from ..models import FileRecord, FilterOptions, FilterStats
from .state import QueryState


def search(records: Sequence[FileRecord], term: Optional[str]) -> List[FileRecord]:
    """
    Case-insensitive substring match across display name, filename, person,
    type and keywords. A blank term matches everything.
    """
    if not term or not term.strip():
        return list(records)

    needle = term.strip().lower()
    return [r for r in records if _matches(r, needle)]


def _matches(record: FileRecord, needle: str) -> bool:
    if needle in record.display_name.lower():
        return True
    if needle in record.filename.lower():
        return True
    if needle in record.person.lower():
        return True
    if any(needle in kw for kw in record.keywords):
        return True
    return needle in record.type.lower()


def filter_records(records: Sequence[FileRecord],
                   person: str = config.ALL,
                   type_: str = config.ALL) -> List[FileRecord]:
    """Exact match on person and type; 'all' leaves that axis unconstrained."""
    return [
        r for r in records
        if (person == config.ALL or r.person == person)
        and (type_ == config.ALL or r.type == type_)
    ]


def _parse_date(value: str) -> datetime:
    # Unknown dates sort as the earliest instant
    if value == config.UNKNOWN:
        return datetime.min
    try:
        return datetime.strptime(' '.join(value.split()), config.DATE_FORMAT)
    except ValueError:
        logging.debug(f"Unparseable listing date {value!r}; treating as earliest.")
        return datetime.min


_SORT_KEY_FUNCS: Dict[str, Callable[[FileRecord], object]] = {
    'name': lambda r: r.display_name.lower(),
    'person': lambda r: r.person.lower(),
    'type': lambda r: r.type.lower(),
    'date': lambda r: _parse_date(r.date),
    'size': lambda r: r.size_bytes or 0,
}


def sort_records(records: Sequence[FileRecord],
                 key: str = config.DEFAULT_SORT,
                 order: str = config.DEFAULT_ORDER) -> List[FileRecord]:
    """
    Stable sort. Records that compare equal keep their relative order in both
    directions.
    """
    if key not in _SORT_KEY_FUNCS:
        raise QueryError(f"Unknown sort key: {key!r} (expected one of {sorted(config.SORT_KEYS)})")
    if order not in config.SORT_ORDERS:
        raise QueryError(f"Unknown sort order: {order!r} (expected one of {list(config.SORT_ORDERS)})")

    return sorted(records, key=_SORT_KEY_FUNCS[key], reverse=(order == 'desc'))


def filter_options(records: Sequence[FileRecord]) -> FilterOptions:
    """Distinct persons/types for building filter controls."""
    persons = {r.person for r in records}
    unknown_count = sum(1 for r in records if r.person == config.UNKNOWN)
    persons.discard(config.UNKNOWN)

    return FilterOptions(
        persons=sorted(persons),
        types=sorted({r.type for r in records}),
        has_unknown_person=unknown_count > 0,
        unknown_person_count=unknown_count,
    )


def filter_stats(all_records: Sequence[FileRecord], filtered: Sequence[FileRecord]) -> FilterStats:
    options = filter_options(all_records)
    person_totals = Counter(r.person for r in all_records)
    type_totals = Counter(r.type for r in all_records)

    return FilterStats(
        total=len(all_records),
        filtered=len(filtered),
        person_counts={p: person_totals[p] for p in options.persons},
        type_counts={t: type_totals[t] for t in options.types},
    )


def apply_query(records: Sequence[FileRecord], state: QueryState) -> List[FileRecord]:
    """Search, then person/type filter, then sort."""
    matched = search(records, state.search)
    matched = filter_records(matched, state.person, state.type)
    return sort_records(matched, state.sort, state.order)
