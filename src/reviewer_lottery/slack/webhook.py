"""
Slack Incoming Webhook Client

Posts JSON payloads to a Slack incoming-webhook URL.
"""

import logging
from typing import Dict, Optional
import requests


logger = logging.getLogger(__name__)


class SlackWebhookError(Exception):
    """Slack webhook delivery errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SlackWebhookClient:
    """Minimal client for Slack incoming webhooks."""

    def __init__(self, webhook_url: str, timeout: int = 10):
        if not webhook_url:
            raise ValueError("Slack webhook URL is required")

        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})

    def send(self, payload: Dict) -> None:
        """
        Send a message payload to the webhook.

        Raises:
            SlackWebhookError: On transport failure or non-2xx response
        """
        try:
            response = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Slack webhook request failed: {e}")
            raise SlackWebhookError(f"Request failed: {str(e)}")

        if not response.ok:
            raise SlackWebhookError(
                f"Slack webhook error: {response.status_code} - {response.text}",
                status_code=response.status_code
            )

        logger.info("Slack notification sent")
