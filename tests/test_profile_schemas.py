"""Tests for the update request and account models."""

import json

import pytest
from pydantic import ValidationError

from updatebot.schemas.profile import UpdatedAccount, UpdateRequest


class TestUpdateRequest:
    def test_only_present_fields_are_serialized(self) -> None:
        assert json.loads(UpdateRequest(username="newname").to_json()) == {"username": "newname"}

    def test_avatar_only(self) -> None:
        patch = UpdateRequest(avatar="data:image/png;base64,AAAA")
        assert json.loads(patch.to_json()) == {"avatar": "data:image/png;base64,AAAA"}

    def test_present_empty_string_is_kept(self) -> None:
        """Presence is explicit, an empty string is still sent."""
        assert json.loads(UpdateRequest(username="").to_json()) == {"username": ""}

    def test_is_empty(self) -> None:
        assert UpdateRequest().is_empty
        assert not UpdateRequest(username="abc").is_empty


class TestUpdatedAccount:
    def test_parses_discord_user(self) -> None:
        account = UpdatedAccount.model_validate_json(
            '{"id": "42", "username": "newname", "discriminator": "0001",'
            ' "avatar": "abc", "bot": true}'
        )
        assert account.tag == "newname#0001"
        assert account.avatar_url("https://cdn.discordapp.com") == (
            "https://cdn.discordapp.com/avatars/42/abc.png"
        )

    def test_null_avatar_is_accepted(self) -> None:
        account = UpdatedAccount.model_validate(
            {"id": "42", "username": "n", "discriminator": "0", "avatar": None}
        )
        assert account.avatar is None
        assert account.avatar_url("https://cdn.discordapp.com") == "https://cdn.discordapp.com/avatars/42/.png"

    def test_missing_fields_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdatedAccount.model_validate({"id": "42"})
