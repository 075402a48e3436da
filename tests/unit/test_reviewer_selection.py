"""
Unit tests for the reviewer lottery.

Tests group policy resolution, random sampling and cross-group selection.
"""

import random
import pytest
from unittest.mock import Mock

from reviewer_lottery.lottery.policy import GroupPolicy
from reviewer_lottery.lottery.sampler import pick_random
from reviewer_lottery.lottery.selector import ReviewerSelector, SelectionResult
from reviewer_lottery.models.group import LotteryConfig, ReviewerEntry, ReviewerGroup


def _group(usernames, reviewers=0, internal_reviewers=None, name=None) -> ReviewerGroup:
    return ReviewerGroup(
        name=name,
        entries=tuple(ReviewerEntry.parse(raw) for raw in usernames),
        reviewers=reviewers,
        internal_reviewers=internal_reviewers,
    )


def _config(*groups) -> LotteryConfig:
    return LotteryConfig(groups=tuple(groups))


class TestGroupPolicy:
    """Unit tests for GroupPolicy."""

    def test_external_author_uses_reviewers(self):
        pool, count = GroupPolicy().resolve(_group(["a", "b"], reviewers=1, internal_reviewers=2), "z")

        assert pool == ["a", "b"]
        assert count == 1

    def test_internal_author_uses_internal_reviewers(self):
        pool, count = GroupPolicy().resolve(_group(["a", "b"], reviewers=1, internal_reviewers=2), "a")

        assert count == 2

    def test_internal_author_without_internal_count(self):
        _, count = GroupPolicy().resolve(_group(["a", "b"], reviewers=1), "a")

        assert count == 1

    def test_zero_internal_count_falls_back(self):
        _, count = GroupPolicy().resolve(_group(["a", "b"], reviewers=1, internal_reviewers=0), "a")

        assert count == 1

    def test_pool_strips_contact_handles(self):
        pool, _ = GroupPolicy().resolve(_group(["a:a.slack", "b"], reviewers=1), "")

        assert pool == ["a", "b"]

    def test_unknown_author(self):
        _, count = GroupPolicy().resolve(_group(["a"], reviewers=0, internal_reviewers=1), "")

        assert count == 0


class TestPickRandom:
    """Unit tests for pick_random."""

    def test_picks_requested_count(self):
        picks = pick_random(["a", "b", "c", "d"], 2, rng=random.Random(1))

        assert len(picks) == 2
        assert len(set(picks)) == 2
        assert set(picks) <= {"a", "b", "c", "d"}

    def test_respects_ignore(self):
        picks = pick_random(["a", "b", "c"], 2, ignore={"a"}, rng=random.Random(7))

        assert sorted(picks) == ["b", "c"]

    def test_stops_when_pool_exhausted(self):
        picks = pick_random(["a", "b"], 5, ignore={"a"})

        assert picks == ["b"]

    def test_everything_ignored(self):
        assert pick_random(["a", "b"], 3, ignore={"a", "b"}) == []

    def test_zero_picks(self):
        assert pick_random(["a", "b"], 0) == []

    def test_empty_pool(self):
        assert pick_random([], 2) == []

    def test_duplicate_items_picked_once(self):
        picks = pick_random(["a", "a", "b"], 3, rng=random.Random(3))

        assert sorted(picks) == ["a", "b"]

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            pick_random(["a"], -1)

    def test_seeded_draws_repeat(self):
        items = [f"user{i}" for i in range(20)]

        first = pick_random(items, 5, rng=random.Random("seed"))
        second = pick_random(items, 5, rng=random.Random("seed"))

        assert first == second


class TestSelectionResult:
    """Unit tests for SelectionResult flags."""

    def test_success(self):
        result = SelectionResult(reviewers=["a"])

        assert result.success
        assert not result.partial

    def test_partial(self):
        result = SelectionResult(reviewers=["a"], errors=["boom"])

        assert not result.success
        assert result.partial

    def test_failed_without_reviewers(self):
        result = SelectionResult(reviewers=[], errors=["boom"])

        assert not result.success
        assert not result.partial


class TestReviewerSelector:
    """Unit tests for ReviewerSelector."""

    def test_author_excluded(self):
        # groups = [{usernames: [a, b, c], reviewers: 2}], author = a
        selector = ReviewerSelector(_config(_group(["a", "b", "c"], reviewers=2)))

        result = selector.select("a")

        assert result.success
        assert sorted(result.reviewers) == ["b", "c"]

    def test_internal_count_capped_by_pool(self):
        # author in pool: draw count becomes 2 but only b remains
        selector = ReviewerSelector(_config(_group(["a", "b"], reviewers=1, internal_reviewers=2)))

        result = selector.select("a")

        assert result.reviewers == ["b"]
        assert result.success

    def test_previous_picks_excluded_from_later_groups(self):
        policy = GroupPolicy()
        config = _config(
            _group(["a", "b", "c"], reviewers=1),
            _group(["b", "d"], reviewers=1),
        )

        for seed in range(25):
            result = ReviewerSelector(config, policy=policy, rng=random.Random(seed)).select("a")

            assert len(result.reviewers) == 2
            assert len(set(result.reviewers)) == 2
            if result.reviewers[0] == "b":
                assert result.reviewers[1] == "d"

    def test_zero_count_group_contributes_nothing(self):
        selector = ReviewerSelector(_config(
            _group(["a", "b"], reviewers=0),
            _group(["c"], reviewers=1),
        ))

        assert selector.select("z").reviewers == ["c"]

    def test_unknown_author(self):
        selector = ReviewerSelector(_config(_group(["a", "b"], reviewers=2)))

        assert sorted(selector.select(None).reviewers) == ["a", "b"]
        assert sorted(selector.select("").reviewers) == ["a", "b"]

    def test_group_order_determines_exclusion(self):
        config = _config(
            _group(["x"], reviewers=1, name="first"),
            _group(["x", "y"], reviewers=1, name="second"),
        )

        assert ReviewerSelector(config).select("a").reviewers == ["x", "y"]

    def test_seeded_selection_is_reproducible(self):
        config = _config(
            _group([f"dev{i}" for i in range(10)], reviewers=2),
            _group([f"qa{i}" for i in range(5)], reviewers=1),
        )

        first = ReviewerSelector(config, rng=random.Random(99)).select("dev0")
        second = ReviewerSelector(config, rng=random.Random(99)).select("dev0")

        assert first.reviewers == second.reviewers

    def test_failing_group_returns_partial_result(self):
        policy = Mock(spec=GroupPolicy)
        policy.resolve.side_effect = [(["b"], 1), RuntimeError("broken group"), (["c"], 1)]
        config = _config(
            _group(["b"], reviewers=1, name="first"),
            _group(["c"], reviewers=1, name="second"),
            _group(["c"], reviewers=1, name="third"),
        )

        result = ReviewerSelector(config, policy=policy).select("a")

        assert result.reviewers == ["b"]
        assert result.partial
        assert "second" in result.errors[0]
        assert policy.resolve.call_count == 2

    def test_failure_in_first_group(self):
        rng = Mock(spec=random.Random)
        rng.randrange.side_effect = RuntimeError("no entropy")

        result = ReviewerSelector(_config(_group(["b", "c"], reviewers=1)), rng=rng).select("a")

        assert result.reviewers == []
        assert not result.success
        assert not result.partial
