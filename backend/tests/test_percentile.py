"""Tests for antenna.engine.percentile: skill-count and collaboration standings."""

import pytest

from antenna.engine.percentile import (
    average_collaborations,
    collaboration_counts,
    collaboration_percentile,
    percentile_rank,
    round_half_up,
    skill_count_percentile,
)
from antenna.models.records import CollaborationEdge, CollabStatus


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.49, 2),
        (0.0, 0),
        (94.9, 95),
    ])
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestPercentileRank:
    def test_strictly_less_than(self):
        # 2 of 5 values are below 10 (the tie at 10 does not count)
        assert percentile_rank(10, [1, 5, 10, 10, 20]) == 40

    def test_lowest_is_zero(self):
        assert percentile_rank(1, [1, 2, 3]) == 0

    def test_total_overrides_denominator(self):
        assert percentile_rank(10, [1, 2, 10], total=8) == 25

    def test_empty_population_is_neutral(self):
        assert percentile_rank(5, [], total=0) == 50

    def test_monotonic_in_keyword_count(self):
        counts = [3, 7, 7, 12, 20, 1, 15]
        ranks = {c: skill_count_percentile(c, counts, len(counts)) for c in counts}
        for a in counts:
            for b in counts:
                if a > b:
                    assert ranks[a] >= ranks[b]


class TestCollaborationStats:
    def _edge(self, cid, a, b, status=CollabStatus.ACCEPTED):
        return CollaborationEdge(collab_id=cid, sender_id=a, receiver_id=b, status=status)

    def test_counts_both_endpoints(self):
        counts = collaboration_counts([
            self._edge("c1", "u1", "u2"),
            self._edge("c2", "u1", "u3"),
        ])
        assert counts["u1"] == 2
        assert counts["u2"] == 1
        assert counts["u3"] == 1

    def test_average_excludes_user(self):
        counts = collaboration_counts([
            self._edge("c1", "me", "u2"),
            self._edge("c2", "me", "u3"),
            self._edge("c3", "u2", "u3"),
        ])
        # u2: 2, u3: 2
        assert average_collaborations(counts, exclude_user="me") == 2

    def test_average_with_no_other_users(self):
        counts = collaboration_counts([])
        assert average_collaborations(counts, exclude_user="me") == 0


class TestCollaborationPercentile:
    def test_zero_count_zero_average(self):
        assert collaboration_percentile(0, 0) == 0

    def test_below_average_never_passes_fifty(self):
        assert collaboration_percentile(2, 4) == 25
        assert collaboration_percentile(4, 4) == 50

    def test_above_average_scales_against_double(self):
        assert collaboration_percentile(6, 4) == 75

    def test_above_average_capped_at_95(self):
        assert collaboration_percentile(50, 4) == 95

    def test_positive_count_with_zero_average_hits_cap(self):
        assert collaboration_percentile(3, 0) == 95

    def test_formulas_are_not_interchangeable(self):
        """Just above average jumps from the 50-scale to the double-average scale."""
        assert collaboration_percentile(4, 4) == 50
        assert collaboration_percentile(5, 4) == 63
