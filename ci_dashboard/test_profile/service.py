import logging
from typing import List

import sentry_sdk

from ci_dashboard.ci import CircleCI
from ci_dashboard.helpers.tasks import gather_or_cancel
from ci_dashboard.test_profile.details import (
    compute_code_url,
    compute_label,
    compute_review_url,
    parse_profile_artifact_path,
)
from ci_dashboard.test_profile.models import (
    TestProfile,
    TestProfileArtifactInfo,
    TestProfileData,
    TestProfileDetails,
)

log = logging.getLogger(__name__)


class NoProfilingArtifactsError(Exception):
    def __init__(self, build_number):
        super().__init__(build_number)
        self.build_number = build_number

    def __str__(self) -> str:
        return f"Build {self.build_number} contains no profiling artifacts"


class TestProfileService(object):
    __test__ = False

    def __init__(self, circleci: CircleCI = None):
        self.circleci = circleci or CircleCI()

    async def fetch_artifact_infos(
        self, build_number: int
    ) -> List[TestProfileArtifactInfo]:
        infos = []
        for artifact in await self.circleci.get_artifacts_v1(build_number):
            parsed = parse_profile_artifact_path(artifact["pretty_path"])
            if parsed is None:
                continue
            browser_name, timestamp = parsed
            infos.append(
                TestProfileArtifactInfo(
                    browser_name=browser_name, timestamp=timestamp, url=artifact["url"]
                )
            )
        return infos

    async def _fetch_profile(self, info: TestProfileArtifactInfo) -> TestProfile:
        artifact = await self.circleci.download_json(
            info.url, endpoint="download_profile"
        )
        return TestProfile.from_artifact(info.browser_name, info.timestamp, artifact)

    async def fetch_profiles(self, build_number: int) -> List[TestProfile]:
        infos = await self.fetch_artifact_infos(build_number)
        return await gather_or_cancel(*(self._fetch_profile(i) for i in infos))

    async def fetch_details(self, build_number: int) -> TestProfileDetails:
        job = await self.circleci.get_job_details(build_number)
        pipeline = await self.circleci.get_pipeline(job["pipeline"]["id"])
        vcs = pipeline["vcs"]
        return TestProfileDetails(
            code_url=compute_code_url(vcs),
            label=compute_label(vcs),
            review_url=compute_review_url(vcs),
            web_url=job["web_url"],
        )

    @sentry_sdk.trace
    async def fetch(self, build_number: int) -> TestProfileData:
        """
        Loads every profiler report uploaded by a CircleCI job together with
        where the profiled change can be reviewed.

        Raises:
            NoProfilingArtifactsError: if the job uploaded no profiler report
            CIError: if CircleCI could not be queried
        """
        profiles, details = await gather_or_cancel(
            self.fetch_profiles(build_number), self.fetch_details(build_number)
        )
        if not profiles:
            log.info(
                "Build contains no profiling artifacts",
                extra=dict(build_number=build_number),
            )
            raise NoProfilingArtifactsError(build_number)
        return TestProfileData(details=details, profiles=profiles)
