from ci_dashboard.ci.azure import AzurePipelines
from ci_dashboard.ci.circleci import CircleCI
from ci_dashboard.ci.s3 import S3ArtifactServer

__all__ = ["AzurePipelines", "CircleCI", "S3ArtifactServer"]
