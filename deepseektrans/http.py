from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonBody:
    payload: dict[str, Any]
    type: str = "Json"


@dataclass(frozen=True)
class FetchResponse:
    ok: bool
    status: int
    data: Any


class Fetch(Protocol):
    """宿主提供的 HTTP 能力。超时、代理等都由实现方负责。

    参数是关键字形式；宿主原生的 fetch(url, {method, headers, body})
    只收一个选项对象，接入时需要包一层适配。
    """

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: dict[str, str],
        body: JsonBody,
    ) -> FetchResponse: ...


class HttpxFetch:
    """基于 httpx 的默认实现，命令行和独立使用时用它。

    传入 client 时复用该 client（生命周期由调用方管理），
    否则每次请求临时建一个。
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._timeout = timeout
        self._client = client

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: dict[str, str],
        body: JsonBody,
    ) -> FetchResponse:
        if self._client is not None:
            response = await self._send(self._client, url, method, headers, body)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await self._send(client, url, method, headers, body)

        try:
            data: Any = response.json()
        except ValueError:
            data = response.text

        return FetchResponse(
            ok=response.is_success,
            status=response.status_code,
            data=data,
        )

    @staticmethod
    async def _send(
        client: httpx.AsyncClient,
        url: str,
        method: str,
        headers: dict[str, str],
        body: JsonBody,
    ) -> httpx.Response:
        logger.debug("%s %s", method, url)
        return await client.request(
            method,
            url,
            headers=headers,
            json=body.payload,
        )
