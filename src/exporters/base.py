from __future__ import annotations

from csv import DictWriter
from decimal import Decimal
from io import StringIO
from typing import Iterable, Protocol, Sequence

from domain.reward import RewardRecord

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RewardExporter(Protocol):
    def render(self, records: Sequence[RewardRecord]) -> bytes: ...


def format_amount(value: Decimal) -> str:
    normalized = value.normalize()
    if normalized.is_zero():
        normalized = normalized.copy_abs()
    # Avoid scientific notation for integers.
    if normalized == normalized.to_integral():
        return f"{normalized:.0f}"
    return format(normalized, "f")


def write_csv(fieldnames: Sequence[str], rows: Iterable[dict[str, str]]) -> bytes:
    buffer = StringIO(newline="")
    writer = DictWriter(buffer, fieldnames=list(fieldnames))
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")
