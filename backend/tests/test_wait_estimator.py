"""Tests for the wait estimator — pure, no database."""
import math
from types import SimpleNamespace

import pytest

from karaoke.models.song_request import RequestStatus
from karaoke.services.wait_estimator import estimate_wait_minutes, resolve_song_minutes

W, N, S = RequestStatus.waiting, RequestStatus.next, RequestStatus.on_stage


def _queue(*statuses):
    return [SimpleNamespace(status=s) for s in statuses]


def _waits(queue, avg=4.5):
    return [estimate_wait_minutes(queue, i, avg) for i in range(len(queue))]


class TestScenarios:
    def test_three_waiting(self):
        """A, B, C waiting at 4.5 min/song → 0, 5, 9."""
        assert _waits(_queue(W, W, W)) == [0, 5, 9]

    def test_last_promoted_to_next(self):
        """C becomes NEXT: A 0, B 5, C one song (5)."""
        assert _waits(_queue(W, W, N)) == [0, 5, 5]

    def test_first_on_stage_while_last_is_next(self):
        """A on stage is not counted ahead of B, so B waits 0."""
        assert _waits(_queue(S, W, N)) == [0, 0, 5]


class TestRules:
    def test_on_stage_is_zero(self):
        assert estimate_wait_minutes(_queue(W, W, S), 2, 10) == 0

    def test_next_ignores_position(self):
        queue = _queue(W, W, W, W, W, N)
        assert estimate_wait_minutes(queue, 5, 4.5) == 5

    def test_next_is_at_least_one_minute(self):
        assert estimate_wait_minutes(_queue(N), 0, 0.2) == 1

    def test_next_entries_ahead_count(self):
        """Only ON_STAGE is excluded from the ahead count; NEXT still counts."""
        assert estimate_wait_minutes(_queue(N, W), 1, 3) == 3

    def test_rounds_up(self):
        assert estimate_wait_minutes(_queue(W, W, W, W), 3, 3.1) == math.ceil(3 * 3.1)

    def test_never_negative(self):
        for queue in (_queue(S), _queue(W), _queue(N), _queue(S, S, W)):
            assert all(w >= 0 for w in _waits(queue))

    def test_waiting_monotonic_in_arrival_order(self):
        queue = _queue(W, S, W, W, N, W, W)
        waits = _waits(queue, 3.7)
        waiting_idx = [i for i, r in enumerate(queue) if r.status == W]
        waiting_waits = [waits[i] for i in waiting_idx]
        assert waiting_waits == sorted(waiting_waits)

    def test_accepts_plain_string_statuses(self):
        queue = [SimpleNamespace(status="ON_STAGE"), SimpleNamespace(status="WAITING")]
        assert _waits(queue, 4) == [0, 0]


class TestSongMinutesResolution:
    @pytest.mark.parametrize("raw", [None, 0, -2, "abc", float("nan"), float("inf"), "", True])
    def test_unusable_values_fall_back(self, raw):
        assert resolve_song_minutes(raw) == 4.5

    @pytest.mark.parametrize("raw,expected", [(3, 3.0), ("6.5", 6.5), (0.5, 0.5)])
    def test_usable_values_kept(self, raw, expected):
        assert resolve_song_minutes(raw) == expected

    def test_estimator_uses_fallback(self):
        assert _waits(_queue(W, W), avg=None) == [0, 5]
