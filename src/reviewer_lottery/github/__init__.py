"""
GitHub Integration Layer

This module provides GitHub API integration for pull request lookup
and reviewer requests.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded, PullRequestNotFoundError

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PullRequestNotFoundError']
