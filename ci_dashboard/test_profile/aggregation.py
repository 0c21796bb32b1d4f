import re
from typing import Dict, Iterable, List, Optional, Sequence

import sentry_sdk

from ci_dashboard.helpers.collation import label_sort_key
from ci_dashboard.test_profile.models import (
    InteractionTrace,
    RenderAggregate,
    TestProfile,
)

# "path/to/file.js:12:34 (interaction name)"
_trace_by_stack = re.compile(r"^([^:]+):(\d+):\d+ \(([^)]+)\)$").match
_unknown_line = re.compile(r"^unknown line \(([^)]+)\)$").match


def profiled_test_ids(profiles: Iterable[TestProfile]) -> List[str]:
    """Every test id that recorded at least one render in any of the runs"""
    test_ids = {
        test_id
        for test_profile in profiles
        for test_id, reports in test_profile.profile.items()
        if len(reports) > 0
    }
    return sorted(test_ids, key=label_sort_key)


@sentry_sdk.trace
def aggregate_by_browser(
    profiles: Iterable[TestProfile], test_id: str
) -> Dict[str, List[RenderAggregate]]:
    """
    Squashes the renders of `test_id` of every run of the same browser, so that
    the n-th RenderAggregate of a browser holds the timings of the n-th render
    of each run.
    """
    profiles_by_browser_name: Dict[str, List[RenderAggregate]] = {}
    for test_profile in profiles:
        reports = test_profile.profile.get(test_id) or []
        if not reports:
            continue

        renders = profiles_by_browser_name.get(test_profile.browser_name)
        if renders is None:
            profiles_by_browser_name[test_profile.browser_name] = [
                RenderAggregate.from_report(report) for report in reports
            ]
            continue

        for render_index, report in enumerate(reports):
            if render_index < len(renders):
                renders[render_index].add(report)
            else:
                # runs don't always render the same number of times
                renders.append(RenderAggregate.from_report(report))
    return profiles_by_browser_name


def median_timing(timings: Sequence[float]) -> float:
    """The upper median of `timings`"""
    if not timings:
        raise ValueError("Cannot compute the median of no timings")
    return sorted(timings)[len(timings) >> 1]


def parse_interaction(name: str, code_url: Optional[str] = None) -> InteractionTrace:
    match = _trace_by_stack(name)
    if match is None:
        unknown_line_match = _unknown_line(name)
        if unknown_line_match is not None:
            return InteractionTrace(name=unknown_line_match.group(1))
        return InteractionTrace(name=name)

    filename, line_number, interaction_name = match.groups()
    url = None
    if code_url is not None:
        url = f"{code_url.rstrip('/')}/{filename}#L{line_number}"
    return InteractionTrace(
        name=interaction_name,
        filename=filename,
        line_number=int(line_number),
        url=url,
    )
