import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .. import config


@dataclass(frozen=True)
class PersonRule:
    pattern: Pattern
    name: str

    def matches(self, stem: str) -> bool:
        return self.pattern.search(stem) is not None


def build_rules(patterns=None) -> List[PersonRule]:
    """Compiles (regex, name, case_sensitive) tuples, keeping their order."""
    rules = []
    for regex, name, case_sensitive in (patterns if patterns is not None else config.PERSON_PATTERNS):
        flags = 0 if case_sensitive else re.IGNORECASE
        rules.append(PersonRule(re.compile(regex, flags), name))
    return rules


class PersonMatcher:
    """
    Infers the person a file belongs to from its name.

    Rules are tried top to bottom and the first hit wins. Names that match no
    rule but look like "First_Last" are title-cased segment by segment.
    """

    def __init__(self, rules: Optional[List[PersonRule]] = None):
        self.rules = rules if rules is not None else build_rules()

    def infer(self, stem: str) -> str:
        for rule in self.rules:
            if rule.matches(stem):
                return rule.name

        if '_' in stem:
            parts = stem.split('_')
            if len(parts) >= 2:
                return ' '.join(_title_segment(p) for p in parts)

        return config.UNKNOWN


def _title_segment(part: str) -> str:
    # first character upper, the rest lower
    return part[:1].upper() + part[1:].lower()
