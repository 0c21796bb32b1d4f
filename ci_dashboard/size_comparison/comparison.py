import logging
from dataclasses import asdict, dataclass
from typing import Callable, List, Mapping, Optional, Union

import sentry_sdk

from ci_dashboard.helpers.collation import label_sort_key

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeMeasurement:
    """
    Sizes (in bytes) of a single bundle in a size snapshot.
    """

    parsed: float
    gzip: float


NULL_MEASUREMENT = SizeMeasurement(parsed=0, gzip=0)

Measurement = Union[SizeMeasurement, Mapping[str, float]]
SizeSnapshot = Mapping[str, Measurement]


@dataclass(frozen=True)
class SizeDiff:
    """
    How one metric (parsed or gzip size) of a bundle changed between two snapshots.
    """

    previous: float
    current: float
    absolute_diff: float
    relative_diff: float

    @classmethod
    def between(cls, previous: float, current: float) -> "SizeDiff":
        return cls(
            previous=previous,
            current=current,
            absolute_diff=current - previous,
            relative_diff=relative_change(previous, current),
        )


@dataclass(frozen=True)
class SizeDelta:
    """
    Info about how a bundle has changed between a base and a target snapshot.
    """

    bundle_id: str
    label: str
    parsed: SizeDiff
    gzip: SizeDiff

    def to_dict(self) -> dict:
        return asdict(self)


def relative_change(previous: float, current: float) -> float:
    """
    `current / previous - 1` with IEEE semantics for a zero `previous`:
    an added bundle is +inf, and 0 -> 0 is nan.
    """
    if previous == 0:
        if current == 0:
            return float("nan")
        return float("inf") if current > 0 else float("-inf")
    return current / previous - 1


def _as_measurement(value: Optional[Measurement]) -> SizeMeasurement:
    if value is None:
        return NULL_MEASUREMENT
    if isinstance(value, SizeMeasurement):
        return value
    return SizeMeasurement(parsed=value["parsed"], gzip=value["gzip"])


def size_delta_sort_key(delta: SizeDelta):
    # orderBy(|parsedDiff| DESC, |gzipDiff| DESC, label ASC)
    return (
        -abs(delta.parsed.absolute_diff),
        -abs(delta.gzip.absolute_diff),
        label_sort_key(delta.label),
    )


@sentry_sdk.trace
def compute_size_deltas(
    base: SizeSnapshot,
    target: SizeSnapshot,
    get_label: Optional[Callable[[str], str]] = None,
) -> List[SizeDelta]:
    """
    Compares every bundle present in either snapshot and ranks the changes,
    biggest first.

    A bundle missing from one of the snapshots counts as size 0 there: an added
    bundle has an infinite relative change and a removed one a change of -1 (-100%).
    """
    bundle_ids = base.keys() | target.keys()
    deltas = []
    for bundle_id in bundle_ids:
        previous_size = _as_measurement(base.get(bundle_id))
        current_size = _as_measurement(target.get(bundle_id))
        deltas.append(
            SizeDelta(
                bundle_id=bundle_id,
                label=get_label(bundle_id) if get_label is not None else bundle_id,
                parsed=SizeDiff.between(previous_size.parsed, current_size.parsed),
                gzip=SizeDiff.between(previous_size.gzip, current_size.gzip),
            )
        )
    deltas.sort(key=size_delta_sort_key)
    log.debug(
        "Computed size deltas",
        extra=dict(
            base_bundles=len(base), target_bundles=len(target), deltas=len(deltas)
        ),
    )
    return deltas
