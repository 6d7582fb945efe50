"""Services used by the updatebot command.

Provides:
- Avatar loading and validation (avatar.py, sniff.py)
- Discord REST access (discord.py)
- Token lookup (token.py)
"""

from .avatar import EncodedAvatar, is_absolute_url, resolve_avatar
from .discord import DiscordClient
from .sniff import detect_content_type
from .token import NonInteractivePrompt, SecretPrompt, TerminalSecretPrompt, get_token

__all__ = [
    # Avatar
    "EncodedAvatar",
    "detect_content_type",
    "is_absolute_url",
    "resolve_avatar",
    # Discord
    "DiscordClient",
    # Token
    "NonInteractivePrompt",
    "SecretPrompt",
    "TerminalSecretPrompt",
    "get_token",
]
