"""
Arknights: Endfield 每日签到

为 CRED 中的每个账号依次签到，结果推送到 Discord Webhook。
"""

import asyncio
import os
import sys
from typing import Optional

# 添加项目根目录到Python路径
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config import RunLogger, logger
from config._version import __version__
from core import manually_endfield_sign
from models import CredentialConfigError, ProjectEnv
from utils import DiscordPushHandler, get_new_session, is_parsable_url, load_credentials


async def main(env: Optional[ProjectEnv] = None) -> int:
    """主异步函数，返回进程退出码"""
    env = env or ProjectEnv()
    logger.info(f"🚀Endfield daily check-in v{__version__}")

    try:
        creds = load_credentials(env.cred)
    except CredentialConfigError as e:
        logger.error(f"❌{e}")
        raise

    logger.info(f"Loaded {len(creds)} account(s)")

    async with RunLogger() as run_logger:
        async with get_new_session(env.preference) as http:
            await manually_endfield_sign(creds, run_logger, http, env.preference)

            # 无法解析的地址直接跳过，不记录错误
            if env.discord_webhook and is_parsable_url(env.discord_webhook):
                await DiscordPushHandler(
                    run_logger,
                    env.discord_webhook,
                    user_id=env.discord_user,
                    http=http,
                    preference=env.preference,
                ).push()

    if run_logger.has_errors:
        logger.error("Error(s) occurred.")
        return 1

    logger.success("All check-ins finished without errors")
    return 0


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
