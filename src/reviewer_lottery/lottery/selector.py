"""
Reviewer Selector

Runs the reviewer lottery across every configured group, in declaration
order. Picks accumulate into a shared exclusion set so nobody is drawn
twice and the PR author is never drawn at all.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.group import LotteryConfig
from .policy import GroupPolicy
from .sampler import pick_random


@dataclass(frozen=True)
class SelectionResult:
    """Result of a reviewer selection pass."""
    reviewers: List[str]
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    @property
    def partial(self) -> bool:
        """Some groups failed but earlier groups still produced reviewers."""
        return bool(self.errors) and bool(self.reviewers)


class ReviewerSelector:
    """
    Selects reviewers for a pull request from the lottery configuration.

    Usage:
        selector = ReviewerSelector(config, rng=random.Random(42))
        result = selector.select(author="alice")
        if result.reviewers:
            client.request_reviewers(owner, repo, number, result.reviewers)
    """

    def __init__(
        self,
        config: LotteryConfig,
        policy: Optional[GroupPolicy] = None,
        rng: Optional[random.Random] = None
    ):
        self._config = config
        self._policy = policy or GroupPolicy()
        self._rng = rng or random.Random()

    def select(self, author: Optional[str]) -> SelectionResult:
        """
        Select reviewers for a PR written by ``author``.

        Args:
            author: PR author username (None or empty if unknown)

        Returns:
            SelectionResult with reviewers in selection order. If a group
            fails, processing stops and the reviewers chosen so far are
            returned together with the error.
        """
        author = author or ""
        excluded = {author} if author else set()
        selected: List[str] = []

        for index, group in enumerate(self._config.groups):
            try:
                pool, count = self._policy.resolve(group, author)
                if not count:
                    continue

                picks = pick_random(pool, count, excluded.union(selected), rng=self._rng)
            except Exception as e:
                return SelectionResult(
                    reviewers=selected,
                    errors=[f"Selection failed for group {group.name or index}: {e}"],
                )

            selected.extend(picks)

        return SelectionResult(reviewers=selected)
