import pytest

from pawpal.deck.gestures import FlickDirection, GestureTracker, Vector, classify_flick


def test_offset_is_sum_of_all_deltas_since_begin():
    tracker = GestureTracker()
    tracker.begin(10, 20, now_ms=0)
    points = [(15, 18), (40, 25), (32, 40), (-5, 12), (120, 30)]
    for i, (x, y) in enumerate(points, start=1):
        tracker.update(x, y, now_ms=i * 16)
    assert tracker.offset == Vector(120 - 10, 30 - 20)


def test_begin_discards_previous_gesture():
    tracker = GestureTracker()
    tracker.begin(0, 0, now_ms=0)
    tracker.update(80, 0, now_ms=10)
    tracker.begin(100, 100, now_ms=20)
    assert tracker.offset == Vector.zero()
    sample = tracker.update(110, 100, now_ms=30)
    assert sample.offset == Vector(10, 0)


def test_velocity_is_latest_sample_not_average():
    tracker = GestureTracker()
    tracker.begin(0, 0, now_ms=0)
    tracker.update(100, 0, now_ms=10)
    sample = tracker.update(110, 0, now_ms=30)
    assert sample.velocity == Vector(0.5, 0.0)


def test_zero_elapsed_time_keeps_previous_velocity():
    tracker = GestureTracker()
    tracker.begin(0, 0, now_ms=0)
    tracker.update(20, 10, now_ms=10)
    sample = tracker.update(60, 10, now_ms=10)
    assert sample.velocity == Vector(2.0, 1.0)
    assert sample.offset == Vector(60, 10)


def test_update_without_begin_is_ignored():
    tracker = GestureTracker()
    assert tracker.update(10, 10, now_ms=5) is None
    assert tracker.offset == Vector.zero()


def test_end_applies_release_point_and_stops():
    tracker = GestureTracker()
    tracker.begin(0, 0, now_ms=0)
    sample = tracker.end(30, 0, now_ms=60)
    assert sample.offset == Vector(30, 0)
    assert sample.velocity == Vector(0.5, 0.0)
    assert not tracker.active
    assert tracker.end(50, 0, now_ms=70) is None


@pytest.mark.parametrize(
    "dx, dy, expected",
    [
        (80, 10, FlickDirection.RIGHT),
        (-80, 10, FlickDirection.LEFT),
        (10, 90, FlickDirection.DOWN),
        (5, -90, FlickDirection.UP),
        (40, 5, None),
        (60, 60, None),
    ],
)
def test_classify_flick_dominant_axis(dx, dy, expected):
    assert classify_flick(dx, dy) is expected


def test_classify_flick_rejects_slow_gestures_when_bounded():
    assert classify_flick(120, 0, elapsed_ms=450, max_duration_ms=300) is None
    assert classify_flick(120, 0, elapsed_ms=200, max_duration_ms=300) is FlickDirection.RIGHT
    assert classify_flick(120, 0, elapsed_ms=450) is FlickDirection.RIGHT
