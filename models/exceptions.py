class EndfieldError(Exception):
    """项目异常基类"""


class CredentialConfigError(EndfieldError):
    """未配置任何账号凭证"""


class EndfieldApiError(EndfieldError):
    """接口返回 code 不为 0"""

    def __init__(self, message: str, code=None):
        super().__init__(message)
        self.code = code
