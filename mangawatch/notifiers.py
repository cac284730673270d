"""Notifiers that tell users about new episodes and failed fetches."""

from __future__ import annotations

import sys

import aiohttp

from .events import DetectFetchError, DetectLastEpUpdated
from .ports import Notifier

DISCORD_API_BASE = "https://discord.com/api/v10"


class StdOutNotifier(Notifier):
    """Prints updates to standard output and errors to standard error."""

    async def notify_latest_episode(self, event: DetectLastEpUpdated) -> None:
        print(
            "最新話が更新されました！\n"
            f"タイトル: {event.title.value}\n"
            f"エピソード: {event.episode.value}\n"
            f"URL: {event.url}"
        )

    async def notify_error(self, event: DetectFetchError) -> None:
        print(
            "最新話の取得中にエラーが発生しました。\n"
            f"タイトル: {event.title.value}\n"
            f"エラー内容: {event.error_message}",
            file=sys.stderr,
        )


class DiscordNotifier(Notifier):
    """Posts updates and errors to two Discord channels through a bot."""

    def __init__(
        self,
        channel_id: int,
        err_channel_id: int,
        token: str,
        api_base: str = DISCORD_API_BASE,
    ):
        for name, value in (("channel_id", channel_id), ("err_channel_id", err_channel_id)):
            if value <= 0:
                raise ValueError(f"{name} must be a positive Discord id, not {value}")
        self.channel_id = channel_id
        self.err_channel_id = err_channel_id
        self._token = token
        self.api_base = api_base.rstrip("/")

    async def _say(self, channel_id: int, content: str) -> None:
        url = f"{self.api_base}/channels/{channel_id}/messages"
        headers = {"Authorization": f"Bot {self._token}"}
        async with aiohttp.ClientSession(headers=headers) as session:
            async with session.post(url, json={"content": content}) as resp:
                resp.raise_for_status()

    async def notify_latest_episode(self, event: DetectLastEpUpdated) -> None:
        await self._say(
            self.channel_id,
            "漫画が更新されました！\n"
            f"**{event.title.value}**: {event.episode.value}\n"
            f"{event.url}",
        )

    async def notify_error(self, event: DetectFetchError) -> None:
        await self._say(
            self.err_channel_id,
            "最新話の取得中にエラーが発生しました。\n"
            f"**{event.title.value}**\n"
            f"エラー内容: {event.error_message}",
        )