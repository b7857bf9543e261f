from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List


@dataclass(frozen=True)
class RawEntry:
    """
    A single file/folder anchor taken from a listing, before enrichment.
    """
    filename: str
    href: str
    url: str                # href resolved against the listing base URL
    row_text: str = ''      # text of the listing row the anchor sits on


@dataclass(frozen=True)
class FileRecord:
    """
    Represents a file found in a directory listing.
    """
    id: str
    filename: str
    display_name: str
    url: str
    type: str               # document/video/archive/webpage/folder
    person: str
    date: str
    size: str
    size_bytes: int
    keywords: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        """Wire shape consumed by presentation layers."""
        return {
            'id': self.id,
            'filename': self.filename,
            'displayName': self.display_name,
            'url': self.url,
            'type': self.type,
            'person': self.person,
            'date': self.date,
            'size': self.size,
            'sizeBytes': self.size_bytes,
            'keywords': sorted(self.keywords),
        }


@dataclass(frozen=True)
class FilterOptions:
    persons: List[str]
    types: List[str]
    has_unknown_person: bool = False
    unknown_person_count: int = 0


@dataclass
class FilterStats:
    total: int
    filtered: int
    person_counts: Dict[str, int] = field(default_factory=dict)
    type_counts: Dict[str, int] = field(default_factory=dict)
