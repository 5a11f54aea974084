import json

import httpx
import pytest

from bridgind.clients.rpc import RPC, event_log_from_rpc, topics_param
from bridgind.core.errors import RpcError

RAW_LOG = {
    "address": "0x3B5357D73fC65487449Cd68550adB9F46A0b8068",
    "topics": ["0xABCDEF", "0x" + "00" * 12 + "11" * 20],
    "data": "0x" + "00" * 31 + "07",
    "blockNumber": "0x64",
    "transactionHash": "0x" + "AB" * 32,
    "logIndex": "0x3",
}


def _rpc(handler) -> RPC:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RPC("http://node.test", client=client)


def test_event_log_from_rpc_normalizes_case_and_ints():
    log = event_log_from_rpc(RAW_LOG)

    assert log.address == RAW_LOG["address"].lower()
    assert log.topics[0] == "0xabcdef"
    assert log.block_number == 100
    assert log.log_index == 3
    assert log.tx_hash == "0x" + "ab" * 32
    assert log.block_timestamp is None
    assert log.data_bytes()[-1] == 7


def test_topics_param_lowercases():
    assert topics_param(["0xAB", "0xCD"]) == [["0xab", "0xcd"]]


@pytest.mark.asyncio
async def test_get_logs_request_and_mapping():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": [RAW_LOG]})

    rpc = _rpc(handler)
    logs = await rpc.get_logs(
        address="0x3B5357D73fC65487449Cd68550adB9F46A0b8068",
        topic0s=["0xABCDEF"],
        from_block=100,
        to_block=200,
    )
    await rpc.aclose()

    assert len(logs) == 1
    body = seen[0]
    assert body["method"] == "eth_getLogs"
    assert body["params"] == [
        {
            "address": "0x3b5357d73fc65487449cd68550adb9f46a0b8068",
            "fromBlock": "0x64",
            "toBlock": "0xc8",
            "topics": [["0xabcdef"]],
        }
    ]


@pytest.mark.asyncio
async def test_latest_block():
    rpc = _rpc(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x10"}))

    assert await rpc.latest_block() == 16
    await rpc.aclose()


@pytest.mark.asyncio
async def test_error_payload_raises_rpc_error():
    rpc = _rpc(
        lambda request: httpx.Response(
            200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32005, "message": "limit exceeded"}}
        )
    )

    with pytest.raises(RpcError) as exc:
        await rpc.get_logs(address="0x" + "00" * 20, topic0s=["0x01"], from_block=0, to_block=1)
    await rpc.aclose()

    assert exc.value.code == -32005
    assert "limit exceeded" in str(exc.value)


@pytest.mark.asyncio
async def test_http_status_error_propagates():
    rpc = _rpc(lambda request: httpx.Response(429))

    with pytest.raises(httpx.HTTPStatusError):
        await rpc.latest_block()
    await rpc.aclose()
