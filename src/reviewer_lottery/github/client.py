"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides methods for listing open pull requests and requesting reviewers.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class PullRequestNotFoundError(GitHubAPIError):
    """No open pull request matches the head ref"""
    def __init__(self, ref: str):
        super().__init__(f"PR matching ref not found: {ref}", status_code=404)
        self.ref = ref


class GitHubClient:
    """
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Listing open pull requests of a repository
    - Requesting reviewers on a pull request
    - API rate limit management
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (usually the workflow's GITHUB_TOKEN)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Request timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Configure retry strategy
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        # Set authentication headers
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'Reviewer-Lottery/1.0'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        if self.rate_limit_remaining <= 10 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            if wait_time > 0:
                logger.warning(f"Rate limit low ({self.rate_limit_remaining}), resets in {wait_time:.1f}s")
                raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)

        if response.status_code == 429:
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def _parse_json(self, response: requests.Response):
        """Decode a JSON response body, raising GitHubAPIError for anything else."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from GitHub: {e}")
            raise GitHubAPIError(
                f"Invalid JSON response: {str(e)}",
                status_code=response.status_code
            )

    def list_pull_requests(self, owner: str, repo: str, state: str = "open") -> List[Dict]:
        """
        List pull requests of a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            state: Pull request state filter ("open", "closed", "all")

        Returns:
            List of pull request data
        """
        logger.info(f"Fetching {state} PRs for {owner}/{repo}")

        pulls = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls',
                params={'state': state, 'page': page, 'per_page': per_page}
            )

            page_pulls = self._parse_json(response)
            if not page_pulls:
                break

            pulls.extend(page_pulls)

            if len(page_pulls) < per_page:
                break

            page += 1

        logger.info(f"Found {len(pulls)} {state} PRs")
        return pulls

    def request_reviewers(self, owner: str, repo: str, pr_number: int, reviewers: List[str]) -> Dict:
        """
        Request reviews from users on a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            reviewers: GitHub usernames (empty values are dropped)

        Returns:
            Updated pull request data
        """
        reviewers = [r for r in reviewers if r]
        logger.info(f"Requesting reviewers for {owner}/{repo}#{pr_number}: {', '.join(reviewers)}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/pulls/{pr_number}/requested_reviewers',
            json={'reviewers': reviewers}
        )
        return self._parse_json(response)
