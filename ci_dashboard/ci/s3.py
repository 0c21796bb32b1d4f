from typing import Any

from ci_dashboard.ci.base import CIBaseAdapter
from ci_dashboard.config import get_config


class S3ArtifactServer(CIBaseAdapter):
    """
    Public bucket where the size snapshots of every commit of a branch are uploaded,
    under `artifacts/{ref}/{commit}/size-snapshot.json`.
    """

    service = "s3"

    def __init__(self, artifact_server: str = None, **kwargs):
        super().__init__(**kwargs)
        self.artifact_server = artifact_server or get_config(
            "s3",
            "artifact_server",
            default="https://s3.eu-central-1.amazonaws.com/mui-org-material-ui",
        )

    @property
    def api_url(self) -> str:
        return self.artifact_server

    async def get_size_snapshot(self, ref: str, commit_id: str) -> Any:
        return await self.api(
            "get",
            f"/artifacts/{ref}/{commit_id}/size-snapshot.json",
            endpoint="get_size_snapshot",
        )
