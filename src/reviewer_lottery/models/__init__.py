"""
Data Models

Reviewer Lottery 시스템의 핵심 데이터 모델들
"""

from .group import ReviewerEntry, ReviewerGroup, LotteryConfig, ReviewerGroupModel, LotteryConfigModel
from .pull_request import PullRequest

__all__ = [
    "ReviewerEntry",
    "ReviewerGroup",
    "LotteryConfig",
    "ReviewerGroupModel",
    "LotteryConfigModel",
    "PullRequest",
]
