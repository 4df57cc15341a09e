import asyncio
import json

import httpx

from lasttx.models.outcome import OutcomeKind
from lasttx.services.chain_adapters.ankr import AnkrAdapter, build_payload

ADDRESS = "0x" + "1" * 40
RPC_URL = "https://rpc.example/multichain/key"


def _adapter(handler, timeout=5.0):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AnkrAdapter(RPC_URL, timeout=timeout, client=client)


def _fetch(handler, chains=("eth",), timeout=5.0):
    async def go():
        async with _adapter(handler, timeout) as adapter:
            return await adapter.fetch_latest(ADDRESS, list(chains), 1)

    return asyncio.run(go())


def test_payload_single_chain_is_a_string():
    payload = build_payload(ADDRESS, ["eth"], 1)
    assert payload["method"] == "ankr_getTransactionsByAddress"
    assert payload["params"] == {
        "blockchain": "eth",
        "address": ADDRESS,
        "descOrder": True,
        "pageSize": 1,
    }


def test_payload_multi_chain_is_a_list():
    payload = build_payload(ADDRESS, ["eth", "bsc"], 30)
    assert payload["params"]["blockchain"] == ["eth", "bsc"]
    assert payload["params"]["pageSize"] == 30
    assert payload["jsonrpc"] == "2.0"


def test_success_returns_transactions():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": 1,
            "result": {
                "transactions": [
                    {"hash": "0xabc", "timestamp": "0x5f5e1000", "blockchain": "eth", "value": "0x0"},
                ],
                "nextPageToken": "token",
            },
        })

    outcome = _fetch(handler)
    assert outcome.kind == OutcomeKind.SUCCESS
    assert outcome.transactions[0].hash == "0xabc"
    assert seen["url"] == RPC_URL
    assert seen["body"]["params"]["address"] == ADDRESS


def test_null_result_is_empty_result():
    outcome = _fetch(lambda request: httpx.Response(200, json={"result": None}))
    assert outcome.kind == OutcomeKind.EMPTY_RESULT


def test_missing_result_is_empty_result():
    outcome = _fetch(lambda request: httpx.Response(200, json={"error": {"code": -32000}}))
    assert outcome.kind == OutcomeKind.EMPTY_RESULT


def test_empty_transaction_list():
    outcome = _fetch(lambda request: httpx.Response(200, json={"result": {"transactions": []}}))
    assert outcome.kind == OutcomeKind.NO_TRANSACTIONS


def test_non_json_body_is_malformed():
    outcome = _fetch(lambda request: httpx.Response(200, text="<html>bad gateway</html>"))
    assert outcome.kind == OutcomeKind.MALFORMED_RESPONSE


def test_wrong_shape_is_malformed():
    outcome = _fetch(lambda request: httpx.Response(200, json={"result": {"transactions": [{"hash": "0x1"}]}}))
    assert outcome.kind == OutcomeKind.MALFORMED_RESPONSE


def test_http_error_status_is_transport_error():
    outcome = _fetch(lambda request: httpx.Response(503, text="unavailable"))
    assert outcome.kind == OutcomeKind.TRANSPORT_ERROR


def test_connect_error_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    outcome = _fetch(handler)
    assert outcome.kind == OutcomeKind.TRANSPORT_ERROR
    assert "refused" in outcome.detail


def test_httpx_timeout_is_timeout():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    assert _fetch(handler).kind == OutcomeKind.TIMEOUT


def test_wall_clock_timeout_is_timeout():
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={"result": None})

    assert _fetch(handler, timeout=0.01).kind == OutcomeKind.TIMEOUT
