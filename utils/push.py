import re
from typing import Optional

import httpx

from config.logger import logger
from config.task_logger import RunLogger
from models import Preference

from .common import get_async_retry, get_new_session

# Discord Webhook 地址前缀
DISCORD_WEBHOOK_PREFIX = "https://discord.com/api/webhooks/"

# 推送标题默认
DEFAULT_PUSH_TITLE = "**Endfield Daily Check-in**"

_WEBHOOK_TOKEN_RE = re.compile(r"(/api/webhooks/[^/\s]+/)[^/\s?]+")


class DiscordPushHandler:
    """Discord Webhook 推送处理器"""

    def __init__(
        self,
        run_logger: RunLogger,
        webhook_url: str,
        user_id: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        preference: Optional[Preference] = None,
    ):
        """
        初始化推送处理器

        :param run_logger: 本次运行的日志上下文，推送内容取自其中的日志
        :param webhook_url: Discord Webhook 地址
        :param user_id: 需要在消息开头提及的 Discord 用户 ID
        :param http: 复用的 HTTP 客户端，不传则临时创建
        """
        self.run_logger = run_logger
        self.webhook_url = webhook_url.strip()
        self.user_id = user_id
        self.http = http
        self.preference = preference or Preference()

    def _safe_log_error(self, exception: Exception):
        """记录错误日志，隐藏 Webhook token"""
        error_msg = _WEBHOOK_TOKEN_RE.sub(r"\1***", str(exception))
        logger.error(f"Discord webhook request failed: {error_msg}")

    def is_valid_webhook(self) -> bool:
        return self.webhook_url.lower().startswith(DISCORD_WEBHOOK_PREFIX)

    def build_message(self, title: str = DEFAULT_PUSH_TITLE) -> str:
        """构建推送内容：提及用户、标题、所有已记录的日志"""
        message = ""
        if self.user_id:
            message = f"<@{self.user_id}>\n"
        message += f"{title}\n"
        message += self.run_logger.format_entries()
        return message

    async def _send_request(
        self, http: httpx.AsyncClient, message: str
    ) -> httpx.Response:
        """发送 Webhook 请求，网络错误时按偏好设置重试"""
        async for attempt in get_async_retry(self.preference):
            with attempt:
                return await http.post(
                    self.webhook_url,
                    headers={"content-type": "application/json"},
                    json={"content": message},
                )

    async def push(self) -> bool:
        """执行推送，返回是否成功"""
        self.run_logger.debug("\n----- DISCORD WEBHOOK -----")

        if not self.is_valid_webhook():
            self.run_logger.error("DISCORD_WEBHOOK is not a Discord webhook URL")
            return False

        message = self.build_message()
        logger.debug(f"Discord message content:\n{message}")

        try:
            if self.http is not None:
                response = await self._send_request(self.http, message)
            else:
                async with get_new_session(self.preference) as http:
                    response = await self._send_request(http, message)
        except httpx.HTTPError as e:
            self._safe_log_error(e)
            response = None

        if response is not None and response.status_code == 204:
            self.run_logger.info("Successfully sent message to Discord webhook!")
            return True

        if response is not None:
            logger.debug(f"Discord webhook responded with {response.status_code}")
        self.run_logger.error("Error sending message to Discord webhook")
        return False
