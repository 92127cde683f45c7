"""Tests for the chain client adapter."""
import pytest
import requests

from deployscan.rpc import Block, Receipt, RpcResult, Transaction, add_hex_prefix, connect

from conftest import CONTRACT


class TestAddHexPrefix:
    def test_adds_missing_prefix(self):
        assert add_hex_prefix("abc") == "0xabc"

    def test_keeps_existing_prefix(self):
        assert add_hex_prefix("0xabc") == "0xabc"

    def test_empty(self):
        assert add_hex_prefix("") == "0x"


class TestRpcResult:
    def test_success(self):
        res = RpcResult.success(5)
        assert res.ok and res.value == 5

    def test_success_with_none_value_is_still_ok(self):
        assert RpcResult.success(None).ok

    def test_failure(self):
        res = RpcResult.failure("boom")
        assert not res.ok and res.error == "boom" and res.value is None


class TestCurrentHeight:
    def test_decodes_hex(self, chain, client):
        chain.head = 100
        assert client.current_height() == RpcResult.success(100)
        assert chain.calls_to("eth_blockNumber") == [[]]

    def test_transport_error(self, chain, client):
        chain.head = requests.exceptions.ConnectionError("connection refused")
        res = client.current_height()
        assert not res.ok
        assert "connection refused" in res.error

    def test_non_hex_result(self, chain, client):
        chain.provider.handlers["eth_blockNumber"] = lambda: "latest"
        assert not client.current_height().ok

    def test_jsonrpc_error_member(self, chain, client):
        del chain.provider.handlers["eth_blockNumber"]
        res = client.current_height()
        assert not res.ok
        assert "not found" in res.error


class TestBlock:
    def test_height_encoded_as_hex(self, chain, client):
        chain.add_tx(100, "0xaa")
        res = client.block(100)
        assert res.ok
        assert chain.calls_to("eth_getBlockByNumber") == [["0x64", True]]
        assert res.value == Block(number=100, transactions=(Transaction(hash="0xaa"),))

    def test_missing_block(self, client):
        res = client.block(7)
        assert not res.ok
        assert "not available" in res.error

    def test_missing_transactions_field(self, chain, client):
        chain.provider.handlers["eth_getBlockByNumber"] = lambda h, full: {"number": h}
        assert not client.block(1).ok

    def test_hash_only_entries_and_malformed_entries(self, chain, client):
        chain.provider.handlers["eth_getBlockByNumber"] = lambda h, full: {
            "transactions": ["0x01", {"hash": "0x02"}, {"input": "0x"}, 42, {"hash": None}],
        }
        res = client.block(1)
        assert [tx.hash for tx in res.value.transactions] == ["0x01", "0x02"]


class TestReceipt:
    def test_contract_creation(self, chain, client):
        chain.receipts["0xaa"] = {"contractAddress": CONTRACT}
        assert client.receipt("0xaa").value == Receipt(transaction_hash="0xaa", contract_address=CONTRACT)

    def test_hash_gets_prefix(self, chain, client):
        chain.receipts["0xaa"] = {"contractAddress": None}
        client.receipt("aa")
        assert chain.calls_to("eth_getTransactionReceipt") == [["0xaa"]]

    @pytest.mark.parametrize("receipt", [
        {"contractAddress": None},
        {},
        {"contractAddress": ""},
        {"contractAddress": 123},
        {"contractAddress": ["0xabc"]},
    ])
    def test_no_usable_address(self, chain, client, receipt):
        chain.receipts["0xaa"] = receipt
        res = client.receipt("0xaa")
        assert res.ok
        assert res.value.contract_address is None

    def test_pending_receipt(self, client):
        assert not client.receipt("0xaa").ok

    def test_malformed_receipt(self, chain, client):
        chain.receipts["0xaa"] = "0xdeadbeef"
        assert not client.receipt("0xaa").ok


class TestCallAndCode:
    def test_call_passes_message_and_tag(self, chain, client):
        chain.owner_responses[CONTRACT] = "0x1234"
        assert client.call(CONTRACT, "0x8da5cb5b").value == "0x1234"
        assert chain.calls_to("eth_call") == [[{"to": CONTRACT, "data": "0x8da5cb5b"}, "latest"]]

    def test_call_non_string_result(self, chain, client):
        chain.owner_responses[CONTRACT] = {"unexpected": True}
        assert not client.call(CONTRACT, "0x8da5cb5b").ok

    def test_code(self, chain, client):
        chain.codes[CONTRACT] = "0x6080"
        assert client.code(CONTRACT).value == "0x6080"
        assert chain.calls_to("eth_getCode") == [[CONTRACT, "latest"]]

    def test_code_timeout(self, chain, client):
        chain.codes[CONTRACT] = requests.exceptions.Timeout("read timed out")
        res = client.code(CONTRACT)
        assert not res.ok
        assert "timed out" in res.error


def test_connect_refused_raises_connection_error():
    with pytest.raises(ConnectionError):
        connect("http://127.0.0.1:1", timeout=1)
