"""
Reviewer Lottery entry point

Reads the GitHub Actions environment, loads the reviewer groups and runs
one review assignment.
"""

import asyncio
import logging
import sys

from .config import AppConfig, ConfigurationError, load_lottery_config, setup_logging
from .github.client import GitHubClient
from .slack.webhook import SlackWebhookClient
from .workflow import ReviewAssignmentWorkflow


logger = logging.getLogger(__name__)


def set_failed(message: str) -> int:
    """Report a failed run to GitHub Actions."""
    print(f"::error::{message}")
    return 1


def main() -> int:
    """Run the reviewer lottery and return the process exit code."""
    try:
        config = AppConfig.from_env()
        config.validate()
        setup_logging(config.logging)
        lottery_config = load_lottery_config(config.lottery_config_path)
    except (ConfigurationError, ValueError) as e:
        return set_failed(str(e))

    workflow = ReviewAssignmentWorkflow(
        config=lottery_config,
        env=config.env,
        github_client=GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        ),
        slack_client=SlackWebhookClient(
            config.slack.webhook_url,
            timeout=config.slack.timeout_seconds,
        ),
    )

    result = asyncio.run(workflow.run())

    if result.failed:
        return set_failed("; ".join(result.errors) or "Reviewer lottery failed")

    logger.info(f"Reviewer lottery {result.status}: {', '.join(result.reviewers) or 'no reviewers'}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
