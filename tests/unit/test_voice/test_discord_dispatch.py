"""
Unit tests for the discord.py voice-state sink.
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from nexus_client.voice.discord_dispatch import DiscordVoiceDispatcher


@pytest.fixture
def mock_guild():
    """Create a mock Discord guild for testing."""
    guild = MagicMock(spec=discord.Guild)
    guild.id = 123456789
    guild.change_voice_state = AsyncMock()
    return guild


@pytest.fixture
def mock_client(mock_guild):
    """Create a mock Discord client that knows one guild."""
    client = MagicMock(spec=discord.Client)
    client.get_guild.side_effect = lambda guild_id: mock_guild if guild_id == mock_guild.id else None
    return client


class TestDiscordVoiceDispatcher:
    """Test cases for DiscordVoiceDispatcher."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_join_channel(self, mock_client, mock_guild):
        """Test a voice-state payload moves the bot into the channel."""
        dispatcher = DiscordVoiceDispatcher(mock_client)
        data = {
            "op": 4,
            "d": {
                "guild_id": "123456789",
                "channel_id": "987654321",
                "self_mute": False,
                "self_deaf": True,
            },
        }

        await dispatcher("123456789", data)

        kwargs = mock_guild.change_voice_state.await_args.kwargs
        assert kwargs["channel"].id == 987654321
        assert kwargs["self_mute"] is False
        assert kwargs["self_deaf"] is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_leave_channel(self, mock_client, mock_guild):
        """Test a null channel disconnects from voice."""
        dispatcher = DiscordVoiceDispatcher(mock_client)

        await dispatcher("123456789", {"op": 4, "d": {"guild_id": "123456789", "channel_id": None}})

        mock_guild.change_voice_state.assert_awaited_once_with(
            channel=None, self_mute=False, self_deaf=False
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_guild(self, mock_client, mock_guild):
        """Test updates for guilds the bot is not in are skipped."""
        dispatcher = DiscordVoiceDispatcher(mock_client)

        await dispatcher("555", {"op": 4, "d": {"guild_id": "555", "channel_id": "1"}})

        mock_guild.change_voice_state.assert_not_awaited()
