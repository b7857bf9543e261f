import logging
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode

from .. import config


@dataclass(frozen=True)
class QueryState:
    """
    The active search/sort/filter selection, shareable as a URL query string.
    """
    search: str = ''
    sort: str = config.DEFAULT_SORT
    order: str = config.DEFAULT_ORDER
    person: str = config.ALL
    type: str = config.ALL

    @property
    def has_active_filters(self) -> bool:
        return (self.person != config.ALL
                or self.type != config.ALL
                or self.sort != config.DEFAULT_SORT
                or self.order != config.DEFAULT_ORDER)

    def to_query_string(self) -> str:
        """Only non-default values are written, to keep links short."""
        params = []
        if self.search:
            params.append(('search', self.search))
        if self.sort != config.DEFAULT_SORT:
            params.append(('sort', self.sort))
        if self.order != config.DEFAULT_ORDER:
            params.append(('order', self.order))
        if self.person != config.ALL:
            params.append(('person', self.person))
        if self.type != config.ALL:
            params.append(('type', self.type))
        return urlencode(params)

    @classmethod
    def from_query_string(cls, query: str) -> "QueryState":
        parsed = parse_qs((query or '').lstrip('?'))

        def first(name: str, default: str) -> str:
            values = parsed.get(name)
            return values[0] if values and values[0] else default

        sort = first('sort', config.DEFAULT_SORT)
        if sort not in config.SORT_KEYS:
            logging.debug(f"Ignoring unknown sort key in bookmark: {sort!r}")
            sort = config.DEFAULT_SORT

        order = first('order', config.DEFAULT_ORDER)
        if order not in config.SORT_ORDERS:
            logging.debug(f"Ignoring unknown sort order in bookmark: {order!r}")
            order = config.DEFAULT_ORDER

        return cls(
            search=first('search', ''),
            sort=sort,
            order=order,
            person=first('person', config.ALL),
            type=first('type', config.ALL),
        )
