"""Update a Discord bot's username and avatar from the command line."""

__version__ = "0.1.0"
