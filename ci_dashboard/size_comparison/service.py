import logging
from dataclasses import dataclass
from typing import Awaitable, List, Optional

import orjson
import sentry_sdk

from ci_dashboard.ci import AzurePipelines, CircleCI, S3ArtifactServer
from ci_dashboard.ci.exceptions import CIError
from ci_dashboard.config import get_config
from ci_dashboard.helpers.hashing import QueryParams, make_cache_key
from ci_dashboard.helpers.tasks import gather_or_cancel
from ci_dashboard.size_comparison.comparison import SizeDelta, compute_size_deltas
from ci_dashboard.size_comparison.labels import (
    get_main_bundle_label,
    get_page_bundle_label,
    is_page_bundle,
)
from ci_dashboard.size_comparison.snapshot import (
    InvalidSizeSnapshotError,
    validate_size_snapshot,
)

log = logging.getLogger(__name__)


class SizeSnapshotFetchError(Exception):
    """
    One of the snapshots of a comparison could not be fetched (or was not a
    valid snapshot). The original error is chained as `__cause__`.
    """

    def __init__(self, message, source=None):
        super().__init__(message)
        self.message = message
        self.source = source


@dataclass(frozen=True)
class SizeComparison:
    main: List[SizeDelta]
    pages: List[SizeDelta]


def serialize_size_comparison(comparison: SizeComparison) -> bytes:
    """
    Serializes a comparison to json. Non-finite relative changes (added bundles)
    are written as `null`.
    """
    return orjson.dumps(comparison)


@sentry_sdk.trace
def group_size_deltas(base, target) -> SizeComparison:
    """
    Splits bundles into docs pages and main bundles before ranking each group
    with its own labels.
    """
    return SizeComparison(
        main=compute_size_deltas(
            {k: v for k, v in base.items() if not is_page_bundle(k)},
            {k: v for k, v in target.items() if not is_page_bundle(k)},
            get_label=get_main_bundle_label,
        ),
        pages=compute_size_deltas(
            {k: v for k, v in base.items() if is_page_bundle(k)},
            {k: v for k, v in target.items() if is_page_bundle(k)},
            get_label=get_page_bundle_label,
        ),
    )


class SizeComparisonService(object):
    def __init__(
        self,
        s3: S3ArtifactServer = None,
        circleci: CircleCI = None,
        azure: AzurePipelines = None,
        cache_epoch: str = None,
    ):
        self.s3 = s3 or S3ArtifactServer()
        self.circleci = circleci or CircleCI()
        self.azure = azure or AzurePipelines()
        self.cache_epoch = cache_epoch or get_config(
            "size_comparison", "cache_epoch", default="v1"
        )

    def cache_key(self, params: QueryParams) -> str:
        """
        The artifacts of a build never change, so the comparison of the same
        params can be cached for as long as the cache epoch stays the same.
        """
        return make_cache_key(params, self.cache_epoch)

    async def _fetch_snapshot(self, source: str, fetch: Awaitable):
        try:
            return validate_size_snapshot(await fetch)
        except (CIError, InvalidSizeSnapshotError) as exc:
            log.warning(
                "Unable to fetch size snapshot",
                extra=dict(source=source, error=str(exc)),
            )
            raise SizeSnapshotFetchError(
                f"Unable to fetch {source} size snapshot: {exc}", source=source
            ) from exc

    async def fetch_snapshots(
        self,
        base_ref: str,
        base_commit: str,
        *,
        circleci_build_number: Optional[int] = None,
        azure_build_id: Optional[int] = None,
    ):
        if (circleci_build_number is None) == (azure_build_id is None):
            raise ValueError(
                "Exactly one of circleci_build_number and azure_build_id is needed"
            )
        if circleci_build_number is not None:
            target_fetch = self._fetch_snapshot(
                "circleci", self.circleci.get_size_snapshot(circleci_build_number)
            )
        else:
            target_fetch = self._fetch_snapshot(
                "azure", self.azure.get_size_snapshot(azure_build_id)
            )
        base_fetch = self._fetch_snapshot(
            "s3", self.s3.get_size_snapshot(base_ref, base_commit)
        )
        # either snapshot is useless without the other
        return await gather_or_cancel(base_fetch, target_fetch)

    async def compare(
        self,
        base_ref: str,
        base_commit: str,
        *,
        circleci_build_number: Optional[int] = None,
        azure_build_id: Optional[int] = None,
    ) -> SizeComparison:
        """
        Compares the size snapshot of `base_commit` on `base_ref` with the one
        built by a CircleCI job or an Azure build.

        Raises:
            ValueError: if not exactly one of the build identifiers is given
            SizeSnapshotFetchError: if either snapshot could not be fetched
        """
        base_snapshot, target_snapshot = await self.fetch_snapshots(
            base_ref,
            base_commit,
            circleci_build_number=circleci_build_number,
            azure_build_id=azure_build_id,
        )
        comparison = group_size_deltas(base_snapshot, target_snapshot)
        log.info(
            "Compared size snapshots",
            extra=dict(
                base_ref=base_ref,
                base_commit=base_commit,
                circleci_build_number=circleci_build_number,
                azure_build_id=azure_build_id,
                main=len(comparison.main),
                pages=len(comparison.pages),
            ),
        )
        return comparison
