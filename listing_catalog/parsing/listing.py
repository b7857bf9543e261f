import logging
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag

from .. import config
from ..exceptions import ListingParseError
from ..models import RawEntry


class ListingParser:
    """
    Turns an Apache mod_autoindex page into RawEntries.

    Two layouts are understood:
      - Plain/Fancy indexing: anchors live inside a <pre> block, one row per line.
      - HTMLTable indexing: anchors live inside <tr> rows (only used when the
        page has no <pre> anchors at all).
    """

    def parse(self, html: str, base_url: str) -> List[RawEntry]:
        """
        Returns one RawEntry per file/folder anchor, in document order.
        Navigation links are dropped and a bad anchor only loses that anchor.
        """
        if not html or not html.strip():
            logging.warning("Empty listing document; nothing to parse.")
            return []

        soup = BeautifulSoup(html, "lxml")

        links = soup.select("pre a[href]")
        table_layout = False
        if not links:
            links = soup.select("table tr a[href]")
            table_layout = bool(links)

        entries: List[RawEntry] = []
        for link in links:
            href = link.get("href", "")
            filename = link.get_text().strip()

            if self.is_navigation_link(href, filename):
                continue

            try:
                entry = self._build_entry(link, filename, href, base_url, table_layout)
            except ListingParseError as e:
                logging.warning(f"Skipping listing entry {filename!r}: {e}")
                continue

            entries.append(entry)

        if not entries:
            logging.warning(f"No file entries found in listing for {base_url}; the listing shape may have changed.")
        else:
            logging.debug(f"Parsed {len(entries)} entries from {base_url}")

        return entries

    @staticmethod
    def is_navigation_link(href: str, filename: str) -> bool:
        """True for parent-directory links, sort controls and in-page anchors."""
        if '..' in href or filename == config.PARENT_DIRECTORY_TEXT:
            return True

        # Apache column sorting controls look like ?C=N;O=D
        if config.SORT_CONTROL_MARKER in href:
            return True

        if href.startswith(config.CONTROL_PREFIXES):
            return True

        return False

    def _build_entry(self,
                     link: Tag,
                     filename: str,
                     href: str,
                     base_url: str,
                     table_layout: bool) -> RawEntry:
        try:
            url = urljoin(base_url, href)
        except ValueError as e:
            raise ListingParseError(f"cannot resolve href {href!r}: {e}") from e

        if table_layout:
            row = link.find_parent("tr")
            row_text = row.get_text(" ") if row is not None else filename
        else:
            row_text = self._pre_row_text(link)

        return RawEntry(filename=filename, href=href, url=url, row_text=row_text)

    def _pre_row_text(self, link: Tag) -> str:
        """
        Text of the line an anchor sits on inside a <pre> block: the anchor text
        plus everything after it up to the next newline or the next anchor.
        """
        parts = [link.get_text()]
        for sibling in link.next_siblings:
            if isinstance(sibling, Tag):
                if sibling.name == "a":
                    break
                text = sibling.get_text()
            elif isinstance(sibling, NavigableString):
                text = str(sibling)
            else:
                continue

            line_end = _find_newline(text)
            if line_end is not None:
                parts.append(text[:line_end])
                break
            parts.append(text)

        return "".join(parts)


def _find_newline(text: str) -> Optional[int]:
    idx = text.find("\n")
    return idx if idx != -1 else None
