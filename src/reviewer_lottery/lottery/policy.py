"""
Group Policy

Resolves how many reviewers a group contributes and from which pool,
depending on whether the PR author belongs to that group.
"""

from typing import List, Tuple

from ..models.group import ReviewerGroup


class GroupPolicy:
    """
    Per-group draw policy.

    A group normally contributes ``reviewers`` picks. When the author is a
    member of the group and ``internal_reviewers`` is set, that count is
    used instead.
    """

    def resolve(self, group: ReviewerGroup, author: str) -> Tuple[List[str], int]:
        """
        Resolve the candidate pool and draw count for a group.

        Args:
            group: Reviewer group definition
            author: PR author username, empty string if unknown

        Returns:
            Tuple of (candidate pool, draw count)
        """
        pool = group.usernames

        if author and author in pool and group.internal_reviewers:
            return pool, group.internal_reviewers

        return pool, group.reviewers or 0
