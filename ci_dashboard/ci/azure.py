import logging
from typing import Any, Dict, Optional

import httpx
import sentry_sdk

from ci_dashboard.ci.base import CIBaseAdapter
from ci_dashboard.ci.exceptions import CIObjectNotFoundError
from ci_dashboard.config import get_config

log = logging.getLogger(__name__)

API_VERSION = "5.1"
SIZE_SNAPSHOT_ARTIFACT_NAME = "size-snapshot"


class AzurePipelines(CIBaseAdapter):
    """
    Client for the Azure DevOps build API.

    https://docs.microsoft.com/en-us/rest/api/azure/devops/build/artifacts/list?view=azure-devops-rest-5.1
    """

    service = "azure"

    def __init__(
        self,
        organization: str = None,
        project: str = None,
        api_url: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.organization = organization or get_config(
            "azure", "organization", default="mui-org"
        )
        self.project = project or get_config("azure", "project", default="material-ui")
        self._base_url = api_url or get_config(
            "azure", "api_url", default="https://dev.azure.com"
        )

    @property
    def api_url(self) -> str:
        return f"{self._base_url}/{self.organization}/{self.project}/_apis"

    def _error_message(self, res: httpx.Response) -> str:
        # azure wraps errors in {typeKey, message}
        try:
            body = res.json()
        except ValueError:
            return super()._error_message(res)
        if not isinstance(body, dict):
            return super()._error_message(res)
        return f"{body.get('typeKey')}: {body.get('message')}"

    async def get_artifact(
        self, build_id: int, artifact_name: str
    ) -> Optional[Dict[str, Any]]:
        """
        Returns the BuildArtifact `{id, name, resource}` named `artifact_name`
        of a build, or None if the build has no such artifact.
        """
        body = await self.api(
            "get",
            f"/build/builds/{build_id}/artifacts",
            endpoint="get_artifacts",
            **{"api-version": API_VERSION},
        )
        try:
            return next(
                (
                    artifact
                    for artifact in body["value"]
                    if artifact["name"] == artifact_name
                ),
                None,
            )
        except (KeyError, TypeError) as exc:
            raise self._unexpected_response(
                "get_artifacts", "returned no list of named artifacts"
            ) from exc

    @sentry_sdk.trace
    async def get_size_snapshot(self, build_id: int) -> Any:
        artifact = await self.get_artifact(build_id, SIZE_SNAPSHOT_ARTIFACT_NAME)
        if artifact is None:
            log.warning(
                "Build has no size snapshot artifact", extra=dict(build_id=build_id)
            )
            raise CIObjectNotFoundError(
                None, f"Build {build_id} has no {SIZE_SNAPSHOT_ARTIFACT_NAME} artifact"
            )
        try:
            download_url = (
                httpx.URL(artifact["resource"]["downloadUrl"])
                .copy_set_param("format", "file")
                .copy_set_param("subPath", "/size-snapshot.json")
            )
        except (KeyError, TypeError) as exc:
            raise self._unexpected_response(
                "get_artifacts", "returned an artifact without downloadUrl"
            ) from exc
        return await self.download_json(str(download_url), endpoint="download_snapshot")
