"""
Slack Integration Layer
"""

from .webhook import SlackWebhookClient, SlackWebhookError

__all__ = ['SlackWebhookClient', 'SlackWebhookError']
