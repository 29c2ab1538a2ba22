"""
SlackOAuthClient — thin client for the Slack Web API.

Every call is a form-encoded POST to https://slack.com/api/<method> with the
OAuth token in the body. Responses come back wrapped in an {"ok": ...}
envelope which is unwrapped here into a payload or a SlackAPIError.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from .errors import SlackAPIError

logger = logging.getLogger(__name__)

SLACK_API_URL = "https://slack.com/api/"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def create_http_client(**http_options) -> httpx.Client:
    """
    Build the httpx client shared by every SlackOAuthClient entry point.

    Args:
        **http_options: Extra httpx.Client options (timeout, transport, ...).
            Extra headers are merged with the form content type.

    Returns:
        httpx.Client bound to the Slack API root

    Raises:
        ValueError: If base_url is given; the API root is fixed
    """
    if "base_url" in http_options:
        raise ValueError("base_url cannot be overridden, it is always the Slack API root")

    headers = {"Content-Type": FORM_CONTENT_TYPE, **(http_options.pop("headers", None) or {})}

    return httpx.Client(
        base_url=SLACK_API_URL,
        headers=headers,
        **http_options,
    )


class SlackOAuthClient:
    """Slack Web API client authenticated with an OAuth access token."""

    @classmethod
    def connect(cls, access_token: Optional[str] = None, **http_options) -> "SlackOAuthClient":
        """Create a client. Same as calling the constructor."""
        return cls(access_token, **http_options)

    def __init__(self, access_token: Optional[str] = None, **http_options):
        self._token = access_token or os.environ.get("SLACK_ACCESS_TOKEN")

        if not self._token:
            raise ValueError("Missing SLACK_ACCESS_TOKEN")

        self._http = create_http_client(**http_options)

    @property
    def access_token(self) -> str:
        """The token sent with every call."""
        return self._token

    def get_http_client(self) -> httpx.Client:
        """Return the underlying httpx client."""
        return self._http

    def close(self):
        """Close the underlying httpx client and its connections."""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def call_method(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict:
        """
        Call a Slack Web API method.

        None values are still sent, as the key with an empty value.

        Args:
            method: API method name, e.g. "chat.postMessage"
            params: Method arguments; the token is appended

        Returns:
            The response envelope

        Raises:
            SlackAPIError: If Slack returns ok: false or a body that is not an object
            httpx.HTTPError: On transport failures and non-2xx responses
        """
        data = {**(params or {}), "token": self._token}

        logger.debug(f"Calling Slack method {method}")
        response = self._http.post(f"/{method}", data=data)
        response.raise_for_status()
        result = response.json()

        if not isinstance(result, dict):
            logger.warning(f"Slack API error in {method}: response is not a JSON object")
            raise SlackAPIError("invalid_response")

        if not result.get("ok"):
            error = result.get("error") or "unknown_error"
            logger.warning(f"Slack API error in {method}: {error}")
            raise SlackAPIError(error, result)

        return result

    def post_message(
        self,
        channel: str,
        text: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """Post a message to a channel. Returns the whole envelope."""
        return self.call_method(
            "chat.postMessage", {"channel": channel, "text": text, **(options or {})}
        )

    def _get_user_list_page(self, cursor: Optional[str] = None) -> Dict:
        return self.call_method("users.list", {"cursor": cursor})

    def get_user_list(self, cursor: Optional[str] = None) -> List[Dict]:
        """Fetch one page of workspace members."""
        return self._get_user_list_page(cursor)["members"]

    def get_all_user_list(self) -> List[Dict]:
        """
        Fetch every workspace member, following users.list cursors.

        Pages are fetched one after another. An error on any page is raised
        and the members collected so far are dropped.

        Returns:
            Members of all pages in fetch order
        """
        page = self._get_user_list_page()
        members = list(page["members"])
        pages = 1

        cursor = (page.get("response_metadata") or {}).get("next_cursor")
        while cursor:
            page = self._get_user_list_page(cursor)
            members.extend(page["members"])
            pages += 1
            cursor = (page.get("response_metadata") or {}).get("next_cursor")

        logger.debug(f"Got {len(members)} members across {pages} pages")
        return members

    def get_user_info(self, user_id: str) -> Dict:
        return self.call_method("users.info", {"user": user_id})["user"]

    def get_channel_list(self) -> List[Dict]:
        return self.call_method("channels.list", {})["channels"]

    def get_channel_info(self, channel_id: str) -> Dict:
        return self.call_method("channels.info", {"channel": channel_id})["channel"]
