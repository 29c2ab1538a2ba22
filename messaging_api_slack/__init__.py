"""
messaging-api-slack: Slack Web API client authenticated with an OAuth token.

Usage:
    from messaging_api_slack import SlackOAuthClient

    client = SlackOAuthClient.connect("xoxp-...")
    client.post_message("C1234567890", "hello", {"as_user": True})
    members = client.get_all_user_list()
"""

from .errors import SlackAPIError
from .oauth_client import SLACK_API_URL, SlackOAuthClient, create_http_client

__all__ = [
    "SlackOAuthClient",
    "SlackAPIError",
    "SLACK_API_URL",
    "create_http_client",
]
__version__ = "0.1.0"
