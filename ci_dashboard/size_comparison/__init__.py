from ci_dashboard.size_comparison.comparison import (
    NULL_MEASUREMENT,
    SizeDelta,
    SizeDiff,
    SizeMeasurement,
    compute_size_deltas,
)
from ci_dashboard.size_comparison.service import (
    SizeComparison,
    SizeComparisonService,
    SizeSnapshotFetchError,
    group_size_deltas,
    serialize_size_comparison,
)
from ci_dashboard.size_comparison.snapshot import (
    InvalidSizeSnapshotError,
    validate_size_snapshot,
)

__all__ = [
    "NULL_MEASUREMENT",
    "SizeDelta",
    "SizeDiff",
    "SizeMeasurement",
    "compute_size_deltas",
    "SizeComparison",
    "SizeComparisonService",
    "SizeSnapshotFetchError",
    "group_size_deltas",
    "serialize_size_comparison",
    "InvalidSizeSnapshotError",
    "validate_size_snapshot",
]
