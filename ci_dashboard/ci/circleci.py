import logging
from typing import Any, Dict, List

import sentry_sdk

from ci_dashboard.ci.base import CIBaseAdapter
from ci_dashboard.ci.exceptions import CIObjectNotFoundError
from ci_dashboard.config import get_config

log = logging.getLogger(__name__)

SIZE_SNAPSHOT_ARTIFACT_PATH = "size-snapshot.json"


class CircleCI(CIBaseAdapter):
    """
    Client for the CircleCI API of a single github project.

    Artifact listings are public; job and pipeline details need a token
    (sent as `Circle-Token`).
    """

    service = "circleci"

    def __init__(self, project_slug: str = None, api_url: str = None, **kwargs):
        if "token" not in kwargs:
            kwargs["token"] = get_config("circleci", "token")
        super().__init__(**kwargs)
        self.project_slug = project_slug or get_config(
            "circleci", "project_slug", default="mui-org/material-ui"
        )
        self._api_url = api_url or get_config(
            "circleci", "api_url", default="https://circleci.com/api"
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    def get_auth_headers(self) -> Dict[str, str]:
        if self.token:
            return {"Circle-Token": self.token}
        return {}

    async def get_artifacts(self, build_number: int) -> List[Dict[str, str]]:
        """Lists the artifacts of a job (API v2), as `{path, url}` items"""
        body = await self.api(
            "get",
            f"/v2/project/gh/{self.project_slug}/{build_number}/artifacts",
            endpoint="get_artifacts",
        )
        items = body.get("items") if isinstance(body, dict) else None
        if not isinstance(items, list):
            raise self._unexpected_response(
                "get_artifacts", "returned no artifact list"
            )
        return items

    async def get_artifacts_v1(self, build_number: int) -> List[Dict[str, Any]]:
        """Lists the artifacts of a build (API v1.1), items have a `pretty_path`"""
        return await self.api(
            "get",
            f"/v1.1/project/github/{self.project_slug}/{build_number}/artifacts",
            endpoint="get_artifacts_v1",
        )

    @sentry_sdk.trace
    async def get_size_snapshot(self, build_number: int) -> Any:
        artifacts = await self.get_artifacts(build_number)
        try:
            artifact = next(
                (
                    artifact
                    for artifact in artifacts
                    if artifact["path"] == SIZE_SNAPSHOT_ARTIFACT_PATH
                ),
                None,
            )
            url = artifact["url"] if artifact is not None else None
        except (KeyError, TypeError) as exc:
            raise self._unexpected_response(
                "get_artifacts", "returned an artifact without path or url"
            ) from exc
        if artifact is None:
            log.warning(
                "Build has no size snapshot artifact",
                extra=dict(build_number=build_number, artifacts=len(artifacts)),
            )
            raise CIObjectNotFoundError(
                None, f"Build {build_number} has no {SIZE_SNAPSHOT_ARTIFACT_PATH}"
            )
        return await self.download_json(url, endpoint="download_snapshot")

    async def get_job_details(self, job_number: int) -> Dict[str, Any]:
        return await self.api(
            "get",
            f"/v2/project/github/{self.project_slug}/job/{job_number}",
            endpoint="get_job_details",
        )

    async def get_pipeline(self, pipeline_id: str) -> Dict[str, Any]:
        return await self.api(
            "get", f"/v2/pipeline/{pipeline_id}", endpoint="get_pipeline"
        )
