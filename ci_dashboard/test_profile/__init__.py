from ci_dashboard.test_profile.aggregation import (
    aggregate_by_browser,
    median_timing,
    parse_interaction,
    profiled_test_ids,
)
from ci_dashboard.test_profile.models import (
    InteractionTrace,
    ProfilerInteraction,
    ProfilerReport,
    RenderAggregate,
    TestProfile,
    TestProfileData,
    TestProfileDetails,
)
from ci_dashboard.test_profile.service import (
    NoProfilingArtifactsError,
    TestProfileService,
)

__all__ = [
    "aggregate_by_browser",
    "median_timing",
    "parse_interaction",
    "profiled_test_ids",
    "InteractionTrace",
    "ProfilerInteraction",
    "ProfilerReport",
    "RenderAggregate",
    "TestProfile",
    "TestProfileData",
    "TestProfileDetails",
    "NoProfilingArtifactsError",
    "TestProfileService",
]
