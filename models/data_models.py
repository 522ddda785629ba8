from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    # 账号与签到数据模型
    "Credential",
    "AttendanceStatus",
    "ClaimResult",
    "SignStatus",
    "AccountSignResult",
    # API 返回数据模型
    "BaseModelWithDefaults",
    "AwardId",
    "ResourceInfo",
    "AttendanceData",
    "ClaimData",
    "ApiResponse",
    # 偏好设置和配置模型
    "Preference",
    "ProjectEnv",
]


# ==================== 账号与签到数据模型 ====================
class Credential(BaseModel):
    """账号凭证，格式为 `token` 或 `token|role`"""

    token: str
    role: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "Credential":
        """在第一个 `|` 处切分凭证字符串"""
        token, sep, role = raw.partition("|")
        role = role.strip() if sep else ""
        return cls(token=token.strip(), role=role or None)


class AttendanceStatus(BaseModel):
    """签到状态"""

    has_today: bool = False
    total_sign_ins: int = 0


class ClaimResult(BaseModel):
    """签到奖励，形如 `名称 x数量`"""

    rewards: List[str] = Field(default_factory=list)


class SignStatus(Enum):
    """单个账号的签到结果"""

    SIGNED = "signed"
    ALREADY_SIGNED = "already_signed"
    FAILED = "failed"


class AccountSignResult(BaseModel):
    """单个账号的签到结果及对应的日志内容"""

    account_index: int
    status: SignStatus
    rewards: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status != SignStatus.FAILED

    @property
    def prefix(self) -> str:
        return f"Account {self.account_index}:"

    @property
    def message(self) -> str:
        if self.status == SignStatus.ALREADY_SIGNED:
            return "Already checked in today"
        if self.status == SignStatus.FAILED:
            return self.error or "Unknown error"
        if self.rewards:
            return f"Successfully checked in! Rewards: {', '.join(self.rewards)}"
        return "Successfully checked in!"


# ==================== API 返回数据模型 ====================
class BaseModelWithDefaults(BaseModel):
    """
    字段为 null 时使用默认值的BaseModel
    """

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_default(cls, v, info: ValidationInfo):
        if v is None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return v


class AwardId(BaseModel):
    id: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _wrap_plain_id(cls, v):
        if isinstance(v, (str, int)):
            return {"id": v}
        return v


class ResourceInfo(BaseModelWithDefaults):
    """奖励物品信息"""

    name: str = ""
    count: str = "0"

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class AttendanceData(BaseModelWithDefaults):
    """GET 签到状态返回的 data 字段"""

    hasToday: bool = False
    records: List[Any] = Field(default_factory=list)


class ClaimData(BaseModelWithDefaults):
    """POST 签到返回的 data 字段"""

    awardIds: List[Any] = Field(default_factory=list)
    resourceInfoMap: Dict[str, Any] = Field(default_factory=dict)
    """两者都在读取奖励时逐条校验，无法识别的条目直接跳过"""


class ApiResponse(BaseModel):
    """SKPort 接口的通用返回结构"""

    code: Optional[int] = None
    message: Optional[str] = None
    data: Optional[dict] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def error_message(self) -> str:
        return self.message or f"API error code: {self.code}"


# ==================== 偏好设置和配置模型 ====================
class Preference(BaseModel):
    """
    偏好设置
    """

    timeout: float = 30
    """网络请求超时时间（单位：秒）"""
    max_retry_times: int = 0
    """网络错误时的最大重试次数，0 表示不重试"""
    retry_interval: float = 2
    """网络请求重试间隔（单位：秒）"""

    model_config = ConfigDict(extra="ignore")


class ProjectEnv(BaseSettings):
    """运行环境配置，从环境变量或 .env 读取"""

    cred: Optional[str] = None
    """多个账号凭证，每行一个"""
    discord_webhook: Optional[str] = None
    discord_user: Optional[str] = None
    preference: Preference = Field(default_factory=Preference)

    @field_validator("discord_webhook", "discord_user", mode="before")
    @classmethod
    def _strip_blank(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
