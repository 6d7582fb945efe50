"""Command line entry point: update the bot's username and/or avatar."""

import argparse
import logging
import sys

import httpx
from pydantic import ValidationError
from pydantic_settings import SettingsError

from updatebot.config import Settings, get_settings
from updatebot.errors import ConfigError, CredentialError, UpdateBotError, UsageError
from updatebot.schemas.options import UpdateOptions, validate_options
from updatebot.schemas.profile import UpdatedAccount, UpdateRequest
from updatebot.services.avatar import resolve_avatar
from updatebot.services.discord import DiscordClient
from updatebot.services.token import SecretPrompt, get_token

logger = logging.getLogger(__name__)


class ExactFlagParser(argparse.ArgumentParser):
    """Argument parser that only accepts flags spelled out in full."""

    def _get_option_tuples(self, option_string):
        # Single-dash flags are prefix-matched even with allow_abbrev=False
        return []


def build_parser() -> argparse.ArgumentParser:
    parser = ExactFlagParser(
        prog="updatebot",
        allow_abbrev=False,
        description="Update the username and/or avatar of a Discord bot.",
    )
    parser.add_argument(
        "-username",
        "--username",
        default="",
        help="the new username for the bot",
    )
    parser.add_argument(
        "-avatar",
        "--avatar",
        default="",
        metavar="URL_OR_PATH",
        help="the new avatar for the bot. either a url or file path",
    )
    return parser


def parse_options(argv: list[str] | None, parser: argparse.ArgumentParser) -> UpdateOptions:
    args = parser.parse_args(argv)
    return validate_options(UpdateOptions(username=args.username, avatar=args.avatar))


def build_update_request(
    options: UpdateOptions,
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> UpdateRequest:
    avatar = None
    if options.avatar is not None:
        encoded = resolve_avatar(
            options.avatar,
            timeout=settings.AVATAR_FETCH_TIMEOUT,
            transport=transport,
        )
        avatar = encoded.data_uri

    patch = UpdateRequest(username=options.username, avatar=avatar)
    if patch.is_empty:
        raise UsageError(
            "incorrect usage: must provide at least one of `-avatar`, `-username`",
            show_usage=True,
        )
    return patch


def format_report(patch: UpdateRequest, account: UpdatedAccount, cdn_base_url: str) -> list[str]:
    lines = ["Updated user"]
    if patch.username is not None:
        lines.append(f"  => Username: {account.tag}")
    if patch.avatar is not None:
        lines.append(f"  => Avatar  : {account.avatar_url(cdn_base_url)}")
    return lines


def run(
    options: UpdateOptions,
    settings: Settings,
    prompt: SecretPrompt | None = None,
    transport: httpx.BaseTransport | None = None,
) -> list[str]:
    """Perform the update and return the confirmation lines.

    Raises:
        UpdateBotError: If any step fails. Nothing has been printed in that case.
    """
    token = get_token(settings, prompt)
    if not token:
        raise CredentialError("no token was provided")

    patch = build_update_request(options, settings, transport)

    with DiscordClient(settings.DISCORD_API_BASE_URL, transport=transport) as client:
        account = client.modify_current_user(token, patch)

    return format_report(patch, account, settings.DISCORD_CDN_BASE_URL)


def load_settings() -> Settings:
    try:
        return get_settings()
    except (ValidationError, SettingsError, UnicodeDecodeError, OSError) as e:
        raise ConfigError(str(e)) from e


def main(
    argv: list[str] | None = None,
    settings: Settings | None = None,
    prompt: SecretPrompt | None = None,
    transport: httpx.BaseTransport | None = None,
) -> int:
    parser = build_parser()
    try:
        options = parse_options(argv, parser)
        if settings is None:
            settings = load_settings()
        lines = run(options, settings, prompt=prompt, transport=transport)
    except UpdateBotError as e:
        logger.debug("updatebot failed", exc_info=True)
        print(e, file=sys.stderr)
        if isinstance(e, UsageError) and e.show_usage:
            print(file=sys.stderr)
            parser.print_help(sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
