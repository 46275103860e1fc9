"""Voice-state sinks for host applications."""

from .discord_dispatch import DiscordVoiceDispatcher

__all__ = ["DiscordVoiceDispatcher"]
