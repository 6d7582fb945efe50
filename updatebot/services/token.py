import getpass
import logging
import sys
from typing import Protocol

from updatebot.config import Settings

logger = logging.getLogger(__name__)

TOKEN_PROMPT = "Bot Token (input feedback is NOT shown) >> "


class SecretPrompt(Protocol):
    """Source of secret input typed by a person."""

    def is_interactive(self) -> bool: ...

    def ask(self, prompt: str) -> str: ...


class TerminalSecretPrompt:
    """Reads a secret from the controlling terminal without echoing it."""

    def __init__(self, stream=None):
        self._stream = stream if stream is not None else sys.stdout

    def is_interactive(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def ask(self, prompt: str) -> str:
        try:
            return getpass.getpass(prompt)
        except (EOFError, OSError) as e:
            logger.warning("Could not read token from terminal: %s", e)
            return ""


class NonInteractivePrompt:
    """Prompt used when nobody is there to answer."""

    def is_interactive(self) -> bool:
        return False

    def ask(self, prompt: str) -> str:
        return ""


def get_token(settings: Settings, prompt: SecretPrompt | None = None) -> str:
    """Resolve the bot token.

    ``DISCORD_TOKEN`` wins whenever it is set, even to an empty value.
    Otherwise the user is asked, but only when stdout is a terminal.

    Returns:
        The token, or an empty string if none could be obtained.
    """
    if settings.DISCORD_TOKEN is not None:
        logger.debug("Using token from DISCORD_TOKEN")
        return settings.DISCORD_TOKEN

    prompt = prompt or TerminalSecretPrompt()
    if not prompt.is_interactive():
        logger.debug("DISCORD_TOKEN not set and stdout is not a terminal")
        return ""

    return prompt.ask(TOKEN_PROMPT)
