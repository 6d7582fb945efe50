import logging

import httpx
from pydantic import ValidationError

from updatebot.errors import APIError
from updatebot.schemas.profile import UpdatedAccount, UpdateRequest

logger = logging.getLogger(__name__)


class DiscordClient:
    """Minimal Discord REST client for the current bot user.

    Wraps a synchronous httpx client. Use it as a context manager so the
    connection pool is closed once the single request is done.
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.Client(transport=transport)

    def __enter__(self) -> "DiscordClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the httpx client."""
        if not self._http_client.is_closed:
            self._http_client.close()

    def modify_current_user(self, token: str, patch: UpdateRequest) -> UpdatedAccount:
        """Send a partial update for the bot user.

        Args:
            token: The bot token, sent as ``Authorization: Bot <token>``.
            patch: Fields to change. Absent fields are left untouched.

        Returns:
            The account as returned by Discord after the update.

        Raises:
            APIError: On any serialization, network, HTTP or decoding failure.
        """
        try:
            body = patch.to_json()
        except (TypeError, ValueError) as e:
            raise APIError("failed to serialize request payload") from e

        headers = {
            "Authorization": f"Bot {token}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/users/@me"

        try:
            request = self._http_client.build_request("PATCH", url, content=body, headers=headers)
        except httpx.InvalidURL as e:
            raise APIError(f"failed to create request: {e}") from e

        logger.info("PATCH %s - fields: %s", url, sorted(patch.model_dump(exclude_none=True)))
        try:
            response = self._http_client.send(request)
        except httpx.HTTPError as e:
            raise APIError(f"failed to modify user: {e}") from e

        if response.status_code != 200:
            logger.warning("Discord returned %s: %s", response.status_code, response.text)
            raise APIError(
                "discord responded with non-200 status: "
                f"{response.status_code} {response.reason_phrase}"
            )

        try:
            account = UpdatedAccount.model_validate_json(response.content)
        except ValidationError as e:
            raise APIError(f"failed to deserialize response from discord: {e}") from e

        logger.info("User %s updated successfully", account.id)
        return account
