import importlib
import os
import sys
import unittest
from unittest.mock import patch

# 添加项目根目录到Python路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx

import config.settings
from models import CredentialConfigError, Credential, Preference, ProjectEnv
from utils.common import (
    custom_attempt_times,
    get_async_retry,
    get_new_session,
    is_parsable_url,
    load_credentials,
)


class TestLoadCredentials(unittest.TestCase):
    """测试凭证解析"""

    def test_single_line(self):
        self.assertEqual(load_credentials("token-a"), ["token-a"])

    def test_blank_lines_and_whitespace(self):
        raw = "\n  token-a  \n\n\t\n token-b|role-1\r\n   \n"
        self.assertEqual(load_credentials(raw), ["token-a", "token-b|role-1"])

    def test_order_preserved(self):
        raw = "c\nb\na"
        self.assertEqual(load_credentials(raw), ["c", "b", "a"])

    def test_missing_value(self):
        with self.assertRaises(CredentialConfigError):
            load_credentials(None)

    def test_only_blank_lines(self):
        with self.assertRaises(CredentialConfigError):
            load_credentials("\n   \n\t\n")


class TestCredential(unittest.TestCase):
    """测试凭证切分"""

    def test_without_role(self):
        credential = Credential.parse(" token ")
        self.assertEqual(credential.token, "token")
        self.assertIsNone(credential.role)

    def test_split_at_first_pipe(self):
        credential = Credential.parse("token | role|extra")
        self.assertEqual(credential.token, "token")
        self.assertEqual(credential.role, "role|extra")

    def test_blank_role(self):
        self.assertIsNone(Credential.parse("token|  ").role)


class TestUrlHelpers(unittest.TestCase):
    """测试 URL 判断"""

    def test_parsable_urls(self):
        self.assertTrue(is_parsable_url("https://discord.com/api/webhooks/1/abc"))
        self.assertTrue(is_parsable_url("http://evil.example/webhook"))

    def test_unparsable_urls(self):
        self.assertFalse(is_parsable_url(None))
        self.assertFalse(is_parsable_url(""))
        self.assertFalse(is_parsable_url("not a url"))

    def test_surrounding_whitespace(self):
        self.assertTrue(is_parsable_url("https://discord.com/api/webhooks/1/a\n"))
        self.assertTrue(is_parsable_url("  https://discord.com/api/webhooks/1/a"))


class TestRetry(unittest.TestCase):
    """测试重试配置"""

    def test_no_retry_by_default(self):
        stop = custom_attempt_times(Preference().max_retry_times)
        self.assertEqual(stop.max_attempt_number, 1)

    def test_retry_times(self):
        self.assertEqual(custom_attempt_times(2).max_attempt_number, 3)

    def test_async_retry_reraises(self):
        retrying = get_async_retry(Preference(max_retry_times=1, retry_interval=0))
        self.assertTrue(retrying.reraise)


class TestProjectEnv(unittest.TestCase):
    """测试环境变量配置"""

    def test_read_from_environment(self):
        environ = {
            "CRED": "token-a\ntoken-b|role",
            "DISCORD_WEBHOOK": "https://discord.com/api/webhooks/1/a\n",
            "DISCORD_USER": "  ",
            "PREFERENCE__TIMEOUT": "5",
            "PREFERENCE__MAX_RETRY_TIMES": "2",
            "PREFERENCE__RETRY_INTERVAL": "0.5",
        }
        with patch.dict(os.environ, environ, clear=True):
            env = ProjectEnv(_env_file=None)

        self.assertEqual(env.cred, "token-a\ntoken-b|role")
        self.assertEqual(env.discord_webhook, "https://discord.com/api/webhooks/1/a")
        self.assertIsNone(env.discord_user)
        self.assertEqual(env.preference.timeout, 5)
        self.assertEqual(env.preference.max_retry_times, 2)
        self.assertEqual(env.preference.retry_interval, 0.5)

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            env = ProjectEnv(_env_file=None)
        self.assertIsNone(env.cred)
        self.assertIsNone(env.discord_webhook)
        self.assertEqual(env.preference, Preference())

    def test_log_level_defaults_to_debug(self):
        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = importlib.reload(config.settings)
                self.assertEqual(settings.LOG_LEVEL, "DEBUG")
                self.assertIsNone(settings.LOG_FILE)
        finally:
            importlib.reload(config.settings)


class TestNewSession(unittest.IsolatedAsyncioTestCase):
    """测试 HTTP 客户端创建"""

    async def test_timeout_from_preference(self):
        async with get_new_session(Preference(timeout=5)) as http:
            self.assertEqual(http.timeout, httpx.Timeout(5))


if __name__ == "__main__":
    unittest.main()
