# endfield.py
import time
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from config.logger import logger
from config.task_logger import RunLogger
from models import (
    AccountSignResult,
    ApiResponse,
    AttendanceData,
    AttendanceStatus,
    AwardId,
    ClaimData,
    ClaimResult,
    Credential,
    EndfieldApiError,
    Preference,
    ResourceInfo,
    SignStatus,
)
from utils import get_async_retry

ATTENDANCE_URL = "https://zonai.skport.com/web/v1/game/endfield/attendance"
"""签到接口，GET 查询状态，POST 领取奖励"""

SKPORT_ORIGIN = "https://game.skport.com"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


def build_headers(cred: str) -> Dict[str, str]:
    """
    构建 SKPort 接口请求头

    凭证格式为 `cred` 或 `cred|sk_game_role`，每次调用都会重新计算时间戳。
    """
    credential = Credential.parse(cred)

    headers = {
        "accept": "application/json, text/plain, */*",
        "content-type": "application/json",
        "origin": SKPORT_ORIGIN,
        "referer": f"{SKPORT_ORIGIN}/",
        "cred": credential.token,
        "platform": "3",
        "sk-language": "en",
        "timestamp": str(int(time.time())),
        "vname": "1.0.0",
        "user-agent": USER_AGENT,
    }

    if credential.role:
        headers["sk-game-role"] = credential.role

    return headers


class EndfieldAttendance:
    """Endfield 每日签到接口"""

    def __init__(
        self, http: httpx.AsyncClient, preference: Optional[Preference] = None
    ):
        self.http = http
        self.preference = preference or Preference()

    async def _request(self, method: str, headers: Dict[str, str]) -> ApiResponse:
        """发送请求并校验返回的 code"""
        async for attempt in get_async_retry(self.preference):
            with attempt:
                response = await self.http.request(
                    method, ATTENDANCE_URL, headers=headers
                )

        result = ApiResponse.model_validate(response.json())
        if not result.ok:
            raise EndfieldApiError(result.error_message, code=result.code)
        return result

    async def get_status(self, headers: Dict[str, str]) -> AttendanceStatus:
        """查询今日是否已签到"""
        result = await self._request("GET", headers)
        data = AttendanceData.model_validate(result.data or {})
        return AttendanceStatus(
            has_today=data.hasToday, total_sign_ins=len(data.records)
        )

    async def claim(self, headers: Dict[str, str]) -> ClaimResult:
        """领取今日签到奖励"""
        result = await self._request("POST", headers)
        data = ClaimData.model_validate(result.data or {})

        rewards: List[str] = []
        for raw_award in data.awardIds:
            try:
                award = AwardId.model_validate(raw_award)
                raw_info = data.resourceInfoMap.get(award.id) if award.id else None
                if not isinstance(raw_info, dict):
                    continue
                info = ResourceInfo.model_validate(raw_info)
            except ValidationError as e:
                logger.debug(f"Skipping unreadable reward {raw_award!r}: {e}")
                continue
            rewards.append(f"{info.name} x{info.count}")

        return ClaimResult(rewards=rewards)

    async def sign(self, cred: str, account_index: int) -> AccountSignResult:
        """
        为单个账号执行签到

        Args:
            cred: 账号凭证
            account_index: 账号序号，从 1 开始

        Returns:
            AccountSignResult: 签到结果，任何异常都会被转换为 FAILED
        """
        try:
            headers = build_headers(cred)

            status = await self.get_status(headers)
            if status.has_today:
                return AccountSignResult(
                    account_index=account_index, status=SignStatus.ALREADY_SIGNED
                )

            result = await self.claim(headers)
            return AccountSignResult(
                account_index=account_index,
                status=SignStatus.SIGNED,
                rewards=result.rewards,
            )

        except Exception as e:
            return AccountSignResult(
                account_index=account_index,
                status=SignStatus.FAILED,
                error=str(e) or type(e).__name__,
            )


async def perform_account_sign(
    client: EndfieldAttendance,
    cred: str,
    account_index: int,
    run_logger: RunLogger,
) -> AccountSignResult:
    """执行单个账号的签到并记录日志"""
    run_logger.debug(f"\n----- CHECKING IN FOR ACCOUNT {account_index} -----")

    result = await client.sign(cred, account_index)
    if result.is_success:
        run_logger.info(result.prefix, result.message)
    else:
        run_logger.error(result.prefix, result.message)
    return result


async def manually_endfield_sign(
    creds: List[str],
    run_logger: RunLogger,
    http: httpx.AsyncClient,
    preference: Optional[Preference] = None,
) -> List[AccountSignResult]:
    """按顺序为所有账号签到，单个账号失败不影响后续账号"""
    client = EndfieldAttendance(http, preference)
    results = []
    for i, cred in enumerate(creds, start=1):
        results.append(await perform_account_sign(client, cred, i, run_logger))
    return results
