"""OAuth2 invite link for adding the bot to a server."""

from __future__ import annotations

import discord

from youtube_music_bot.domain.shared.constants import InviteConstants


def invite_permissions() -> discord.Permissions:
    return discord.Permissions(InviteConstants.PERMISSIONS)


def build_invite_url(application_id: int) -> str:
    """Invite URL granting the voice and messaging permissions the bot needs."""
    return discord.utils.oauth_url(
        application_id,
        permissions=invite_permissions(),
        scopes=InviteConstants.SCOPES,
    )
