"""
Reviewer Lottery

Pull Request 리뷰어 자동 추첨 및 Slack 알림 GitHub Action
"""

__version__ = "1.0.0"

from .workflow import ReviewAssignmentWorkflow, AssignmentResult, WorkflowState

__all__ = ["ReviewAssignmentWorkflow", "AssignmentResult", "WorkflowState"]
