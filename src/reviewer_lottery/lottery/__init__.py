"""
Reviewer Lottery

Group policy, random sampling and reviewer selection.
"""

from .policy import GroupPolicy
from .sampler import pick_random
from .selector import ReviewerSelector, SelectionResult

__all__ = ['GroupPolicy', 'pick_random', 'ReviewerSelector', 'SelectionResult']
