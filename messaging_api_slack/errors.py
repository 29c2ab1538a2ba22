"""Exceptions raised by the Slack Web API client."""

from typing import Dict, Optional


class SlackAPIError(Exception):
    """Raised when Slack answers with ``ok: false``.

    The message is the platform error code verbatim (e.g. ``channel_not_found``).
    """

    def __init__(self, error: str, response: Optional[Dict] = None):
        self.error = error
        self.response = response or {}
        super().__init__(error)
