"""
Voice-state relay for discord.py bots.

The node asks the bot to join, move or leave voice channels by sending a
gateway voice-state payload (``{"op": 4, "d": {...}}``). This sink applies it
through the bot's own gateway connection.
"""

import logging
from typing import Any, Dict, Optional

import discord


class DiscordVoiceDispatcher:
    """Applies node voice-state requests with ``Guild.change_voice_state``."""

    def __init__(self, client: discord.Client, logger: Optional[logging.Logger] = None):
        """
        Args:
            client: Connected discord.py client
            logger: Logger instance
        """
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def __call__(self, guild_id: str, data: Dict[str, Any]) -> None:
        state = data.get("d") or {}

        guild = self.client.get_guild(int(guild_id))
        if guild is None:
            self.logger.warning(f"Voice state update for unknown guild {guild_id}")
            return

        channel_id = state.get("channel_id")
        channel = discord.Object(id=int(channel_id)) if channel_id else None

        await guild.change_voice_state(
            channel=channel,
            self_mute=bool(state.get("self_mute", False)),
            self_deaf=bool(state.get("self_deaf", False)),
        )
        self.logger.debug(f"Voice state updated in guild {guild_id}: channel={channel_id}")
