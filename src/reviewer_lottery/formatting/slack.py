"""
Slack Message Formatter

Formats reviewer assignments as Slack Block Kit payloads.
"""

import logging
from typing import Dict, List

from ..models.pull_request import PullRequest


logger = logging.getLogger(__name__)


class SlackMessageFormatter:
    """
    Formats reviewer assignment notifications for Slack.

    Reviewers are mentioned by their configured contact handle; a reviewer
    without one is mentioned by GitHub username.
    """

    def format_mentions(self, reviewers: List[str], contacts: Dict[str, str]) -> str:
        """Build the comma separated mention list."""
        return ", ".join(f"@{contacts.get(username) or username}" for username in reviewers)

    def format_assignment(
        self,
        reviewers: List[str],
        contacts: Dict[str, str],
        pull_request: PullRequest
    ) -> Dict:
        """
        Format an assignment notification.

        Args:
            reviewers: Selected GitHub usernames
            contacts: GitHub username -> Slack handle mapping
            pull_request: The pull request reviewers were assigned to

        Returns:
            Slack webhook payload
        """
        mentions = self.format_mentions(reviewers, contacts)
        logger.debug(f"Formatting Slack notification for {mentions}")

        text = (
            f"<{mentions}> Has been assigned to _{pull_request.title}_. \n\n"
            f"<{pull_request.url}|View pull request>"
        )

        return {
            'blocks': [
                {
                    'type': 'section',
                    'text': {
                        'type': 'mrkdwn',
                        'text': text,
                    },
                }
            ]
        }
