from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ProfilerInteraction:
    id: int
    name: str


@dataclass
class ProfilerReport:
    """
    A single `React.Profiler` onRender callback recorded while running a test.
    """

    phase: str
    actual_duration: float
    base_duration: float
    start_time: float
    commit_time: float
    interactions: List[ProfilerInteraction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ProfilerReport":
        return cls(
            phase=data["phase"],
            actual_duration=data["actualDuration"],
            base_duration=data["baseDuration"],
            start_time=data["startTime"],
            commit_time=data["commitTime"],
            interactions=[
                ProfilerInteraction(id=i["id"], name=i["name"])
                for i in data.get("interactions") or []
            ],
        )


@dataclass
class TestProfile:
    """Every profiler report of one karma run, by test id"""

    __test__ = False

    browser_name: str
    timestamp: int
    profile: Dict[str, List[ProfilerReport]]

    @classmethod
    def from_artifact(
        cls, browser_name: str, timestamp: int, artifact: dict
    ) -> "TestProfile":
        return cls(
            browser_name=browser_name,
            timestamp=timestamp,
            profile={
                test_id: [ProfilerReport.from_dict(report) for report in reports]
                for test_id, reports in artifact.items()
            },
        )


@dataclass(frozen=True)
class TestProfileArtifactInfo:
    __test__ = False

    browser_name: str
    timestamp: int
    url: str


@dataclass(frozen=True)
class TestProfileDetails:
    __test__ = False

    code_url: str
    label: str
    review_url: str
    web_url: str


@dataclass
class RenderAggregate:
    """
    The measurements of the same render (by index) of a test across repeated runs.
    """

    phase: str
    actual_duration: List[float]
    base_duration: List[float]
    start_time: List[float]
    commit_time: List[float]
    interactions: List[ProfilerInteraction]

    @classmethod
    def from_report(cls, report: ProfilerReport) -> "RenderAggregate":
        return cls(
            phase=report.phase,
            actual_duration=[report.actual_duration],
            base_duration=[report.base_duration],
            start_time=[report.start_time],
            commit_time=[report.commit_time],
            interactions=report.interactions,
        )

    def add(self, report: ProfilerReport) -> None:
        self.actual_duration.append(report.actual_duration)
        self.base_duration.append(report.base_duration)
        self.start_time.append(report.start_time)
        self.commit_time.append(report.commit_time)


@dataclass(frozen=True)
class InteractionTrace:
    name: str
    filename: Optional[str] = None
    line_number: Optional[int] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class TestProfileData:
    __test__ = False

    details: TestProfileDetails
    profiles: List[TestProfile]
