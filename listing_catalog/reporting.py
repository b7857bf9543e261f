import csv
import logging
from pathlib import Path
from typing import List, Sequence, Union

from .models import FileRecord
from .query import engine


class ReportGenerator:
    HEADERS = [
        "ID",
        "Filename",
        "Display Name",
        "Type",
        "Person",
        "Date",
        "Size",
        "Size Bytes",
        "URL",
    ]

    def __init__(self, records: Sequence[FileRecord]):
        self.records = list(records)

    def write_csv(self, output_csv: Union[str, Path]) -> int:
        """
        Writes one row per record, in the current order. Returns the row count.
        """
        logging.info(f"Writing {len(self.records)} records -> {output_csv}")

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for rec in self.records:
                writer.writerow(self._row(rec))

        return len(self.records)

    def _row(self, rec: FileRecord) -> list:
        return [
            rec.id,
            rec.filename,
            rec.display_name,
            rec.type,
            rec.person,
            rec.date,
            rec.size,
            rec.size_bytes,
            rec.url,
        ]

    def summary(self) -> str:
        """Totals per type and per person, as a printable block."""
        stats = engine.filter_stats(self.records, self.records)
        options = engine.filter_options(self.records)

        lines: List[str] = [f"Files: {stats.total}", "", "By type:"]
        for ftype, count in stats.type_counts.items():
            lines.append(f"  {ftype.ljust(10)} {count:5d}")

        lines.append("")
        lines.append("By person:")
        for person, count in stats.person_counts.items():
            lines.append(f"  {person.ljust(32)} {count:5d}")
        if options.has_unknown_person:
            lines.append(f"  {'(unknown)'.ljust(32)} {options.unknown_person_count:5d}")

        return "\n".join(lines)
