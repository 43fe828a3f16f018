"""CSV export of a recording session (samples and period records)."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from .delivery import DeliveryError, DocumentDelivery
from .file_paths import sanitize_filename

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..core.models import PeriodRecord, Sample

logger = logging.getLogger(__name__)

EXPORT_HEADER = ("kind", "time_s", "period_s", "y_rel_center_m")
DEFAULT_FILENAME = "period_vs_time.csv"
MIME_TYPE = "text/csv"

KIND_SAMPLE = "sample"
KIND_PERIOD = "period"

TIME_PLACES = 3
PERIOD_PLACES = 3
Y_PLACES = 4


@dataclass(frozen=True, slots=True)
class ExportRow:
    kind: str
    t: float
    period: Optional[float]
    y: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of a successful export."""

    filename: str
    target: str
    row_count: int
    used_fallback: bool = False


def merge_rows(
    samples: Sequence["Sample"],
    records: Sequence["PeriodRecord"],
) -> Iterator[ExportRow]:
    """
    Merge two time-ordered sequences into one, ascending by ``t``.

    Linear two-way merge. On equal timestamps the sample comes first, and the
    relative order inside each input is preserved.
    """
    i = j = 0
    n_samples, n_records = len(samples), len(records)
    while i < n_samples and j < n_records:
        sample, record = samples[i], records[j]
        if sample.t <= record.t:
            yield ExportRow(KIND_SAMPLE, sample.t, None, sample.y)
            i += 1
        else:
            yield ExportRow(KIND_PERIOD, record.t, record.period, record.y)
            j += 1
    for sample in samples[i:]:
        yield ExportRow(KIND_SAMPLE, sample.t, None, sample.y)
    for record in records[j:]:
        yield ExportRow(KIND_PERIOD, record.t, record.period, record.y)


def format_fixed(value: float, places: int) -> str:
    """
    Fixed-point text with ``places`` decimals.

    Ties round away from zero on the exact binary value of ``value``, which
    keeps the output identical to what downstream tooling was built against.
    """
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # enough digits for every integer digit plus the decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return format(exact.quantize(quantum, rounding=ROUND_HALF_UP), "f")


def format_row(row: ExportRow) -> List[str]:
    period = "" if row.period is None else format_fixed(row.period, PERIOD_PLACES)
    return [
        row.kind,
        format_fixed(row.t, TIME_PLACES),
        period,
        format_fixed(row.y, Y_PLACES),
    ]


def render_csv(samples: Sequence["Sample"], records: Sequence["PeriodRecord"]) -> str:
    """Render the merged dataset, header first, one line per row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    writer.writerows(format_row(row) for row in merge_rows(samples, records))
    return buffer.getvalue()


def export_dataset(
    samples: Sequence["Sample"],
    records: Sequence["PeriodRecord"],
    delivery: DocumentDelivery,
    fallback: DocumentDelivery | None = None,
    *,
    filename: str = DEFAULT_FILENAME,
) -> Optional[ExportResult]:
    """
    Render and deliver the dataset.

    Returns ``None`` without touching either delivery when there is nothing
    to export. If ``delivery`` fails, ``fallback`` gets the same document; a
    failure with no fallback left raises :class:`DeliveryError`.
    """
    if not samples and not records:
        logger.info("Nothing recorded; export skipped")
        return None

    filename = sanitize_filename(filename)
    text = render_csv(samples, records)
    row_count = len(samples) + len(records)

    try:
        target = delivery.deliver(filename, text, MIME_TYPE)
    except (DeliveryError, OSError) as exc:
        if fallback is None:
            raise DeliveryError(f"Export of {filename} failed: {exc}") from exc
        logger.warning("Primary delivery of %s failed (%s); using fallback", filename, exc)
    else:
        return ExportResult(filename=filename, target=target, row_count=row_count)

    try:
        target = fallback.deliver(filename, text, MIME_TYPE)
    except (DeliveryError, OSError) as exc:
        raise DeliveryError(f"Export of {filename} failed on fallback as well: {exc}") from exc
    return ExportResult(filename=filename, target=target, row_count=row_count, used_fallback=True)
