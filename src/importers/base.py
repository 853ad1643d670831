from __future__ import annotations

from csv import DictReader
from datetime import datetime, timezone
from io import StringIO
from typing import Iterator, Protocol

from domain.errors import ParseError
from domain.reward import RewardRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class RewardImporter(Protocol):
    def parse(self, data: bytes) -> list[RewardRecord]: ...


def parse_timestamp(value: str | datetime | None) -> datetime:
    """Parse an export timestamp, treating naive values as UTC.

    Exports use `YYYY-MM-DD HH:MM:SS`; ISO-8601 variants are accepted too. An
    explicit offset is kept so the reported calendar date survives.
    """
    if isinstance(value, datetime):
        ts = value
    elif not isinstance(value, str):
        raise ValueError(f"Missing timestamp (got {value!r})")
    else:
        raw = value.strip()
        try:
            ts = datetime.strptime(raw, TIMESTAMP_FORMAT)
        except ValueError:
            if raw.endswith(("Z", "z")):
                raw = f"{raw[:-1]}+00:00"
            try:
                ts = datetime.fromisoformat(raw)
            except ValueError:
                raise ValueError(f"Unparseable timestamp {value!r}") from None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def read_rows(data: bytes, *, source: str, required: set[str]) -> Iterator[tuple[str, dict[str, str]]]:
    """Yield `(row_ref, row)` pairs for every data row of a CSV export.

    Columns are looked up by header name, so their order does not matter.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"{source} input is not valid UTF-8: {exc}") from exc

    reader = DictReader(StringIO(text, newline=""))
    if reader.fieldnames is None:
        raise ParseError(f"{source} input is empty or missing headers")
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    missing = required - set(reader.fieldnames)
    if missing:
        raise ParseError(f"{source} input missing required columns: {', '.join(sorted(missing))}")

    for row in reader:
        yield f"{source}:{reader.line_num}", row
