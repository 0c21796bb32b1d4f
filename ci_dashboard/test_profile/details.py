import re
from typing import Any, Dict, Optional, Tuple

_pull_branch = re.compile(r"pull/(\d+)/(head|merge)")
_pull_label = re.compile(r"pull/(\d+)/")
_profile_artifact_path = re.compile(
    r"^react-profiler-report/karma/([^/]+)/(\d+)\.json$"
).match


def parse_profile_artifact_path(path: str) -> Optional[Tuple[str, int]]:
    """
    >>> parse_profile_artifact_path("react-profiler-report/karma/chrome/1600000000.json")
    ('chrome', 1600000000)
    >>> parse_profile_artifact_path("size-snapshot.json") is None
    True
    """
    match = _profile_artifact_path(path)
    if match is None:
        return None
    browser_name, timestamp = match.groups()
    return browser_name, int(timestamp)


def compute_review_url(vcs: Dict[str, Any]) -> str:
    """
    Computes a URL to github where the change relevant to a pipeline is reviewable.

    That is the full PR if the pipeline ran on a PR, otherwise the commit the
    pipeline ran on.
    """
    branch = vcs.get("branch")
    pull_match = _pull_branch.search(branch) if branch is not None else None
    if pull_match is None:
        return f"{vcs['origin_repository_url']}/commit/{vcs['revision']}/"
    return f"{vcs['origin_repository_url']}/pull/{pull_match.group(1)}/"


def compute_label(vcs: Dict[str, Any]) -> str:
    branch = vcs.get("branch")
    if branch is None:
        return "Unknown"

    pull_match = _pull_label.search(branch)
    if pull_match is not None:
        return f"#{pull_match.group(1)}"

    return f"{branch} ({vcs['revision'][:8]})"


def compute_code_url(vcs: Dict[str, Any]) -> str:
    return f"{vcs['origin_repository_url']}/tree/{vcs['revision']}/"
