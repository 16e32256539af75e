import asyncio

import httpx

from holiday_bot.keepalive import self_ping


def test_self_ping_hits_health_endpoint() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"status": "ok"})

    async def scenario() -> int | None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await self_ping("https://bot.example.com/", client)

    assert asyncio.run(scenario()) == 200
    assert seen == ["https://bot.example.com/health"]


def test_self_ping_failure_is_swallowed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario() -> int | None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await self_ping("https://bot.example.com", client)

    assert asyncio.run(scenario()) is None


def test_self_ping_malformed_url_is_swallowed() -> None:
    assert asyncio.run(self_ping("https://bot.example.com:notaport")) is None
