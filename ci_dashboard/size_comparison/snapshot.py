import logging
from typing import Any, Dict

from cerberus import Validator

from ci_dashboard.size_comparison.comparison import SizeMeasurement

log = logging.getLogger(__name__)


class InvalidSizeSnapshotError(Exception):
    def __init__(self, errors):
        super().__init__(errors)
        self.errors = errors

    def __str__(self) -> str:
        return f"InvalidSizeSnapshotError[errors={self.errors}]"


measurement_schema = {
    "type": "dict",
    # snapshots may carry more metrics than the ones we compare
    "allow_unknown": True,
    "schema": {
        "parsed": {"type": "number", "required": True, "min": 0},
        "gzip": {"type": "number", "required": True, "min": 0},
    },
}

snapshot_schema = {
    "snapshot": {
        "type": "dict",
        "required": True,
        "keysrules": {"type": "string"},
        "valuesrules": measurement_schema,
    }
}


def validate_size_snapshot(data: Any) -> Dict[str, SizeMeasurement]:
    """
    Validates the (untrusted) json content of a size snapshot artifact.

    Raises:
        InvalidSizeSnapshotError: if `data` is not a mapping of bundle ids to
            {parsed, gzip} byte sizes
    """
    validator = Validator(snapshot_schema)
    if not validator.validate({"snapshot": data}):
        log.warning(
            "Size snapshot is invalid", extra=dict(errors=validator.errors)
        )
        raise InvalidSizeSnapshotError(validator.errors)
    return {
        bundle_id: SizeMeasurement(parsed=value["parsed"], gzip=value["gzip"])
        for bundle_id, value in data.items()
    }
