from typing import Callable, List

import httpx


class RecordingTransport(httpx.MockTransport):
    """记录所有请求的 MockTransport"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handler)

    @property
    def methods(self) -> List[str]:
        return [request.method for request in self.requests]


def attendance_handler(status_payload: dict, claim_payload: dict = None):
    """按请求方法返回签到状态或领取结果"""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=status_payload)
        return httpx.Response(200, json=claim_payload or {"code": 0, "data": {}})

    return handler
