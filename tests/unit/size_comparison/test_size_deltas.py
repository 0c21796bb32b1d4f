import dataclasses
import math

import pytest

from ci_dashboard.helpers.collation import label_sort_key
from ci_dashboard.size_comparison import (
    SizeDelta,
    SizeDiff,
    SizeMeasurement,
    compute_size_deltas,
)
from ci_dashboard.size_comparison.comparison import relative_change


def test_compute_size_deltas_empty_snapshots():
    assert compute_size_deltas({}, {}) == []


def test_compute_size_deltas_added_bundle():
    deltas = compute_size_deltas({}, {"b": {"parsed": 100, "gzip": 50}})

    assert len(deltas) == 1
    delta = deltas[0]
    assert delta.bundle_id == "b"
    assert delta.label == "b"
    assert delta.parsed.previous == 0
    assert delta.parsed.current == 100
    assert delta.parsed.absolute_diff == 100
    assert delta.parsed.relative_diff == math.inf
    assert delta.gzip == SizeDiff(
        previous=0, current=50, absolute_diff=50, relative_diff=math.inf
    )


def test_compute_size_deltas_removed_bundle():
    deltas = compute_size_deltas({"b": {"parsed": 100, "gzip": 50}}, {})

    assert len(deltas) == 1
    delta = deltas[0]
    assert delta.parsed.previous == 100
    assert delta.parsed.current == 0
    assert delta.parsed.absolute_diff == -100
    assert delta.parsed.relative_diff == -1
    assert delta.gzip.absolute_diff == -50
    assert delta.gzip.relative_diff == -1


def test_compute_size_deltas_unchanged_bundle_sorted_last():
    deltas = compute_size_deltas(
        {"a": {"parsed": 10, "gzip": 5}, "b": {"parsed": 10, "gzip": 5}},
        {"a": {"parsed": 10, "gzip": 5}, "b": {"parsed": 11, "gzip": 5}},
    )

    assert [delta.bundle_id for delta in deltas] == ["b", "a"]
    assert deltas[1].parsed.absolute_diff == 0
    assert deltas[1].gzip.absolute_diff == 0
    assert deltas[1].parsed.relative_diff == 0


def test_compute_size_deltas_mixed_scenario():
    deltas = compute_size_deltas(
        {"a": {"parsed": 1000, "gzip": 400}},
        {"a": {"parsed": 1100, "gzip": 440}, "b": {"parsed": 50, "gzip": 20}},
    )

    assert [delta.bundle_id for delta in deltas] == ["a", "b"]
    assert deltas[0].parsed.absolute_diff == 100
    assert deltas[0].gzip.absolute_diff == 40
    assert deltas[0].parsed.relative_diff == pytest.approx(0.1)
    assert deltas[1].parsed.relative_diff == math.inf


def test_compute_size_deltas_same_snapshot(sample_base_snapshot):
    deltas = compute_size_deltas(sample_base_snapshot, sample_base_snapshot)

    assert len(deltas) == len(sample_base_snapshot)
    for delta in deltas:
        assert delta.parsed.absolute_diff == 0
        assert delta.gzip.absolute_diff == 0
        assert delta.parsed.relative_diff == 0
        assert delta.gzip.relative_diff == 0
    # all ties, so ordered by label
    assert [delta.label for delta in deltas] == sorted(sample_base_snapshot)


def test_compute_size_deltas_covers_union_of_bundles(
    sample_base_snapshot, sample_target_snapshot
):
    deltas = compute_size_deltas(sample_base_snapshot, sample_target_snapshot)

    bundle_ids = [delta.bundle_id for delta in deltas]
    assert len(bundle_ids) == len(set(bundle_ids))
    assert set(bundle_ids) == set(sample_base_snapshot) | set(sample_target_snapshot)


def test_compute_size_deltas_ordering(sample_base_snapshot, sample_target_snapshot):
    deltas = compute_size_deltas(sample_base_snapshot, sample_target_snapshot)

    for x, y in zip(deltas, deltas[1:]):
        x_parsed, y_parsed = abs(x.parsed.absolute_diff), abs(y.parsed.absolute_diff)
        x_gzip, y_gzip = abs(x.gzip.absolute_diff), abs(y.gzip.absolute_diff)
        assert (
            x_parsed > y_parsed
            or (x_parsed == y_parsed and x_gzip > y_gzip)
            or (
                x_parsed == y_parsed
                and x_gzip == y_gzip
                and label_sort_key(x.label) <= label_sort_key(y.label)
            )
        )
    assert [delta.bundle_id for delta in deltas] == [
        "docs:/components/slider",
        "@material-ui/core/Slider",
        "docs:/getting-started",
        "@material-ui/core/Popper.esm",
        "docs.main",
        "@material-ui/core/Button",
        "docs:/components/buttons",
        "@material-ui/core/Textarea",
    ]


def test_compute_size_deltas_gzip_breaks_parsed_ties():
    deltas = compute_size_deltas(
        {},
        {
            "c": {"parsed": 10, "gzip": 5},
            "a": {"parsed": 10, "gzip": 5},
            "b": {"parsed": 10, "gzip": 7},
        },
    )

    assert [delta.bundle_id for delta in deltas] == ["b", "a", "c"]


def test_compute_size_deltas_decrease_ranks_by_magnitude():
    deltas = compute_size_deltas(
        {"shrunk": {"parsed": 500, "gzip": 100}, "grown": {"parsed": 100, "gzip": 10}},
        {"shrunk": {"parsed": 200, "gzip": 80}, "grown": {"parsed": 150, "gzip": 20}},
    )

    assert [delta.bundle_id for delta in deltas] == ["shrunk", "grown"]
    assert deltas[0].parsed.absolute_diff == -300
    assert deltas[0].parsed.relative_diff == pytest.approx(-0.6)


def test_compute_size_deltas_sorts_ties_by_label():
    labels = {"x1": "beta", "x2": "alpha"}

    deltas = compute_size_deltas(
        {},
        {"x1": {"parsed": 1, "gzip": 1}, "x2": {"parsed": 1, "gzip": 1}},
        get_label=labels.get,
    )

    assert [(delta.bundle_id, delta.label) for delta in deltas] == [
        ("x2", "alpha"),
        ("x1", "beta"),
    ]


def test_compute_size_deltas_sorts_label_ties_ignoring_case():
    deltas = compute_size_deltas(
        {},
        {
            "Zeta": {"parsed": 1, "gzip": 1},
            "alpha": {"parsed": 1, "gzip": 1},
            "Alpha": {"parsed": 1, "gzip": 1},
        },
    )

    assert [delta.label for delta in deltas] == ["Alpha", "alpha", "Zeta"]


def test_compute_size_deltas_accepts_measurements():
    deltas = compute_size_deltas(
        {"a": SizeMeasurement(parsed=10, gzip=4)},
        {"a": SizeMeasurement(parsed=15, gzip=5)},
    )

    assert deltas == [
        SizeDelta(
            bundle_id="a",
            label="a",
            parsed=SizeDiff(previous=10, current=15, absolute_diff=5, relative_diff=0.5),
            gzip=SizeDiff(previous=4, current=5, absolute_diff=1, relative_diff=0.25),
        )
    ]


def test_size_delta_is_immutable():
    (delta,) = compute_size_deltas({}, {"a": {"parsed": 1, "gzip": 1}})

    with pytest.raises(dataclasses.FrozenInstanceError):
        delta.label = "other"


def test_size_delta_to_dict():
    (delta,) = compute_size_deltas({"a": {"parsed": 4, "gzip": 2}}, {})

    assert delta.to_dict() == {
        "bundle_id": "a",
        "label": "a",
        "parsed": {
            "previous": 4,
            "current": 0,
            "absolute_diff": -4,
            "relative_diff": -1,
        },
        "gzip": {
            "previous": 2,
            "current": 0,
            "absolute_diff": -2,
            "relative_diff": -1,
        },
    }


def test_relative_diff_is_never_nan_for_bundles_with_a_size(
    sample_base_snapshot, sample_target_snapshot
):
    deltas = compute_size_deltas(sample_base_snapshot, sample_target_snapshot)

    for delta in deltas:
        assert not math.isnan(delta.parsed.relative_diff)
        assert not math.isnan(delta.gzip.relative_diff)


def test_relative_diff_of_zero_sized_bundle():
    # only reachable when a snapshot itself reports a bundle of size 0
    (delta,) = compute_size_deltas(
        {"empty": {"parsed": 0, "gzip": 0}}, {"empty": {"parsed": 0, "gzip": 0}}
    )

    assert delta.parsed.absolute_diff == 0
    assert math.isnan(delta.parsed.relative_diff)


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (100, 150, 0.5),
        (100, 0, -1.0),
        (0, 10, math.inf),
        (200, 100, -0.5),
    ],
)
def test_relative_change(previous, current, expected):
    assert relative_change(previous, current) == expected
