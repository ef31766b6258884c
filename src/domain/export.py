"""
CSV export of registrations.

Output is produced one record at a time: the first chunk carries the UTF-8
byte-order mark and the header, every following chunk is one encoded row.
Nothing beyond the current row is buffered, so a response can start sending
before the registration query has finished.
"""

import csv
import io
from collections.abc import Iterable, Iterator
from datetime import datetime

from .models import RegistrationDetail, category_label

UTF8_BOM = b"\xef\xbb\xbf"

CSV_HEADER = (
    "ID",
    "Full Name",
    "Email",
    "College Name",
    "Department",
    "Category",
    "Event Name",
    "Event Date",
    "Submission Date",
)

CSV_CONTENT_TYPE = "text/csv; charset=utf-8"


def export_filename(now: datetime) -> str:
    """Attachment filename, e.g. event_registrations_20240615_093000.csv."""
    return f"event_registrations_{now:%Y%m%d_%H%M%S}.csv"


class CsvExporter:
    """Serializes registrations as UTF-8 CSV with a byte-order mark."""

    def __init__(self, lineterminator: str = "\n") -> None:
        self._buffer = io.StringIO()
        self._writer = csv.writer(
            self._buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=lineterminator
        )

    def export(self, registrations: Iterable[RegistrationDetail]) -> Iterator[bytes]:
        """
        Yield the encoded CSV document chunk by chunk.

        The returned generator is single-use and consumes registrations
        lazily.
        """
        yield UTF8_BOM + self._encode(CSV_HEADER)
        for registration in registrations:
            yield self._encode(self.row(registration))

    @staticmethod
    def row(registration: RegistrationDetail) -> tuple[str, ...]:
        """Column values for one registration, in header order."""
        return (
            str(registration.id),
            registration.full_name,
            registration.email,
            registration.college_name,
            registration.department,
            category_label(registration.category),
            registration.event_name,
            f"{registration.event_date:%Y-%m-%d}",
            f"{registration.created_at:%Y-%m-%d %H:%M:%S}",
        )

    def _encode(self, values: Iterable[str]) -> bytes:
        self._writer.writerow(values)
        line = self._buffer.getvalue()
        self._buffer.seek(0)
        self._buffer.truncate(0)
        return line.encode("utf-8")
