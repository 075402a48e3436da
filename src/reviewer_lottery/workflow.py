"""
Review Assignment Workflow

Main interface that drives one reviewer lottery run, from pull request
lookup to reviewer request and Slack notification.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import ActionEnv
from .formatting.slack import SlackMessageFormatter
from .github.client import GitHubAPIError, GitHubClient, PullRequestNotFoundError
from .lottery.selector import ReviewerSelector
from .models.group import LotteryConfig
from .models.pull_request import PullRequest
from .slack.webhook import SlackWebhookClient, SlackWebhookError


logger = logging.getLogger(__name__)


class WorkflowState(str, enum.Enum):
    """States of a review assignment run."""
    START = "start"
    PR_FETCHED = "pr_fetched"
    READINESS_CHECKED = "readiness_checked"
    SELECTED = "selected"
    SKIPPED = "skipped"
    ASSIGNED = "assigned"
    DONE = "done"


@dataclass
class AssignmentResult:
    """Result of a review assignment run."""
    repository: str
    ref: str
    status: str  # 'assigned', 'skipped', 'failed'
    reviewers: List[str] = field(default_factory=list)
    pr_number: Optional[int] = None
    transitions: List[WorkflowState] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class PullRequestLookup:
    """
    Read-once accessor for the pull request of the current branch.

    The first call lists open pull requests and keeps the one whose head
    ref matches; later calls return the same snapshot without refetching.
    """

    def __init__(self, github_client: GitHubClient, env: ActionEnv):
        self._client = github_client
        self._env = env
        self._pull_request: Optional[PullRequest] = None

    async def get(self) -> PullRequest:
        """
        Return the pull request snapshot.

        Raises:
            PullRequestNotFoundError: If no open PR matches the head ref
            GitHubAPIError: For API errors
        """
        if self._pull_request is not None:
            return self._pull_request

        owner, repo = self._env.owner_and_repo()
        pulls = self._client.list_pull_requests(owner, repo)

        for data in pulls:
            if (data.get('head') or {}).get('ref') == self._env.ref:
                try:
                    self._pull_request = PullRequest.from_api(data)
                except (KeyError, TypeError, ValueError) as e:
                    raise GitHubAPIError(f"Malformed pull request payload for ref {self._env.ref}: {e}")
                return self._pull_request

        raise PullRequestNotFoundError(self._env.ref)


class ReviewAssignmentWorkflow:
    """
    Drives one reviewer lottery run:
    1. Find the open PR for the current branch
    2. Skip drafts
    3. Select reviewers across all groups
    4. Request the reviewers on GitHub and notify them on Slack

    A workflow instance handles exactly one run.
    """

    def __init__(
        self,
        config: LotteryConfig,
        env: ActionEnv,
        github_client: GitHubClient,
        slack_client: SlackWebhookClient,
        selector: Optional[ReviewerSelector] = None,
        formatter: Optional[SlackMessageFormatter] = None
    ):
        """
        Initialize the workflow.

        Args:
            config: Reviewer group configuration
            env: Repository and head ref of the current run
            github_client: GitHub API client
            slack_client: Slack webhook client
            selector: Optional reviewer selector (built from config if omitted)
            formatter: Optional Slack message formatter
        """
        self.config = config
        self.env = env
        self.github_client = github_client
        self.slack_client = slack_client
        self.selector = selector or ReviewerSelector(config)
        self.formatter = formatter or SlackMessageFormatter()
        self.pull_request = PullRequestLookup(github_client, env)
        self._started = False

    async def run(self) -> AssignmentResult:
        """
        Run the review assignment once.

        Returns:
            AssignmentResult describing the terminal outcome
        """
        if self._started:
            raise RuntimeError("ReviewAssignmentWorkflow is single-use; create a new instance per run")
        self._started = True

        result = AssignmentResult(
            repository=self.env.repository,
            ref=self.env.ref,
            status="skipped",
            transitions=[WorkflowState.START],
        )
        logger.info(f"Starting reviewer lottery for {self.env.repository} ({self.env.ref})")

        try:
            pr = await self.pull_request.get()
        except GitHubAPIError as e:
            logger.error(f"Pull request lookup failed: {e}")
            return self._finish(result, "failed", error=str(e))

        result.pr_number = pr.number
        result.transitions.append(WorkflowState.PR_FETCHED)

        ready = await self.is_ready_to_review()
        result.transitions.append(WorkflowState.READINESS_CHECKED)
        if not ready:
            logger.info(f"PR #{pr.number} is a draft, skipping reviewer assignment")
            return self._finish(result, "skipped")

        reviewers = await self.select_reviewers(result, pr)
        if not reviewers:
            if result.errors:
                return self._finish(result, "failed")
            logger.info(f"No reviewers selected for PR #{pr.number}")
            result.transitions.append(WorkflowState.SKIPPED)
            return self._finish(result, "skipped")

        result.reviewers = reviewers
        result.transitions.append(WorkflowState.SELECTED)

        await self.assign_and_notify(result, pr, reviewers)
        result.transitions.append(WorkflowState.ASSIGNED)

        return self._finish(result, "failed" if result.errors else "assigned")

    async def is_ready_to_review(self) -> bool:
        """A PR is ready when it exists and is not a draft."""
        try:
            pr = await self.pull_request.get()
        except GitHubAPIError as e:
            logger.error(f"Pull request lookup failed: {e}")
            return False
        return pr.is_ready_to_review

    async def select_reviewers(self, result: AssignmentResult, pr: PullRequest) -> List[str]:
        """Run the lottery; partial failures become warnings, total failures errors."""
        selection = self.selector.select(pr.author)

        for error in selection.errors:
            if selection.partial:
                logger.warning(f"Partial reviewer selection: {error}")
                result.warnings.append(error)
            else:
                logger.error(f"Reviewer selection failed: {error}")
                result.errors.append(error)

        logger.info(f"Selected reviewers for PR #{pr.number}: {selection.reviewers}")
        return selection.reviewers

    async def assign_and_notify(
        self,
        result: AssignmentResult,
        pr: PullRequest,
        reviewers: List[str]
    ) -> None:
        """Request reviewers on GitHub and post the Slack notification."""
        owner, repo = self.env.owner_and_repo()

        try:
            self.github_client.request_reviewers(owner, repo, pr.number, reviewers)
        except GitHubAPIError as e:
            logger.error(f"Requesting reviewers failed for PR #{pr.number}: {e}")
            result.errors.append(str(e))

        payload = self.formatter.format_assignment(reviewers, self.config.contact_map(), pr)
        try:
            self.slack_client.send(payload)
        except SlackWebhookError as e:
            logger.error(f"Slack notification failed for PR #{pr.number}: {e}")
            result.errors.append(str(e))

    def _finish(self, result: AssignmentResult, status: str, error: Optional[str] = None) -> AssignmentResult:
        if error:
            result.errors.append(error)
        result.status = status
        result.transitions.append(WorkflowState.DONE)
        logger.info(f"Reviewer lottery finished: {status}")
        return result
