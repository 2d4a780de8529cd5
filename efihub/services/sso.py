"""
SSO service for EFIHUB.

Base path: /sso
"""

import structlog

from efihub.api.http_client import HttpClient
from efihub.api.response import Rule, expect_success, first_match, is_string
from efihub.exceptions import RemoteCallError
from efihub.models.sso import SSOUser

logger = structlog.get_logger(__name__)

AUTHORIZE_ENDPOINT = "/sso/authorize"
USER_ENDPOINT = "/sso/user"


class SSOService:
    """Starts SSO logins and resolves callback tokens to users."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def login(self) -> str | None:
        """
        Generate the authorization URL for an SSO login.

        Returns:
            Authorization URL, or None if the call failed or the server sent
            no URL.
        """
        response = self._http.post(
            AUTHORIZE_ENDPOINT,
            {"client_id": self._http.config.client_id},
        )
        try:
            body = expect_success(response, AUTHORIZE_ENDPOINT)
        except RemoteCallError as e:
            logger.warning("SSO authorize failed", status=e.code, endpoint=e.endpoint)
            return None

        return first_match(body, [Rule("data.authorization_url", is_string)])

    def user_data(self, redirect_token: str) -> SSOUser | None:
        """
        Fetch the user behind an SSO callback.

        Args:
            redirect_token: Token received on the SSO callback.

        Returns:
            The user, or None if the call failed or no user record was sent.
        """
        response = self._http.get(USER_ENDPOINT, {"redirect_token": redirect_token})
        try:
            body = expect_success(response, USER_ENDPOINT)
        except RemoteCallError as e:
            logger.warning("SSO user lookup failed", status=e.code, endpoint=e.endpoint)
            return None

        user = first_match(body, [Rule("data", lambda value: isinstance(value, dict))])
        if user is None:
            return None
        return SSOUser.from_api(user)
