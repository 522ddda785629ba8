from typing import List, Optional

import httpx
import tenacity

from models import CredentialConfigError, Preference

__all__ = [
    "load_credentials",
    "custom_attempt_times",
    "get_async_retry",
    "get_new_session",
    "is_parsable_url",
]


def load_credentials(raw: Optional[str]) -> List[str]:
    """
    解析 CRED 配置，每行一个账号凭证

    :param raw: 原始配置内容
    :return: 去除首尾空白、丢弃空行后的凭证列表
    :raises CredentialConfigError: 未配置或没有任何有效凭证
    """
    creds = [line.strip() for line in (raw or "").splitlines()]
    creds = [cred for cred in creds if cred]
    if not creds:
        raise CredentialConfigError("CRED environment variable not set!")
    return creds


def custom_attempt_times(max_retry_times: int):
    """
    自定义的重试机制停止条件\n
    给出相应的`tenacity.stop_after_attempt`对象

    :param max_retry_times: 最大重试次数，0 表示执行一次即停止，即不进行重试
    """
    return tenacity.stop_after_attempt(max(max_retry_times, 0) + 1)


def get_async_retry(preference: Preference):
    """
    获取异步重试器，仅对网络传输错误重试

    :param preference: 偏好设置，读取 max_retry_times 与 retry_interval
    """
    return tenacity.AsyncRetrying(
        stop=custom_attempt_times(preference.max_retry_times),
        retry=tenacity.retry_if_exception_type(httpx.TransportError),
        wait=tenacity.wait_fixed(preference.retry_interval),
        reraise=True,
    )


def get_new_session(
    preference: Optional[Preference] = None, **kwargs
) -> httpx.AsyncClient:
    """创建 HTTP 客户端实例"""
    preference = preference or Preference()
    return httpx.AsyncClient(
        timeout=preference.timeout,
        follow_redirects=True,
        **kwargs,
    )


def is_parsable_url(url: Optional[str]) -> bool:
    """判断字符串能否解析为带协议的绝对 URL"""
    if not url:
        return False
    try:
        return bool(httpx.URL(url.strip()).scheme)
    except (httpx.InvalidURL, TypeError):
        return False
