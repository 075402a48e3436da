"""
Notification Formatting

Formats reviewer assignments for chat notifications.
"""

from .slack import SlackMessageFormatter

__all__ = ['SlackMessageFormatter']
