"""OAuth2 client-credentials token endpoint."""

import httpx
import structlog

from efihub.api.response import Rule, first_match, json_body
from efihub.config import EfihubConfig
from efihub.exceptions import AuthenticationError, MalformedTokenResponseError

logger = structlog.get_logger(__name__)


def _is_token(value: object) -> bool:
    return isinstance(value, str) and bool(value)


TOKEN_RULES = (
    Rule("access_token", _is_token),
    Rule("data.access_token", _is_token),
    Rule("token", _is_token),
    Rule("data.token", _is_token),
)

MAX_OBSERVED_KEYS = 20


def fetch_access_token(client: httpx.Client, config: EfihubConfig) -> str:
    """
    Request a new access token with the client-credentials grant.

    Args:
        client: HTTP client used for the call.
        config: Supplies token URL and credentials.

    Returns:
        Bearer token.

    Raises:
        AuthenticationError: If the endpoint is unreachable or answers non-2xx.
        MalformedTokenResponseError: If a 2xx body has no usable token.
    """
    logger.debug("Fetching access token", token_url=config.token_url)
    try:
        response = client.post(
            config.token_url,
            data={
                "client_id": config.client_id,
                "client_secret": config.client_secret,
                "grant_type": "client_credentials",
            },
            headers={"Accept": "application/json"},
        )
    except httpx.TransportError as e:
        msg = "Failed to reach EFIHUB token endpoint"
        raise AuthenticationError(msg) from e

    if not response.is_success:
        logger.warning("Token request rejected", status=response.status_code)
        msg = "Failed to fetch EFIHUB token"
        raise AuthenticationError(msg, status_code=response.status_code)

    payload = json_body(response)
    token = first_match(payload, TOKEN_RULES)
    if not token:
        keys = sorted(str(k) for k in payload) if isinstance(payload, dict) else []
        msg = "Token response has no access token"
        raise MalformedTokenResponseError(msg, observed_keys=keys[:MAX_OBSERVED_KEYS])

    logger.debug("Access token fetched")
    return token
