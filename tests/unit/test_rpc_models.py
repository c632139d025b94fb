"""
Tests unitaires pour les modèles JSON-RPC (RpcRequest, enveloppes).
"""
import pytest

from rube_mcp_adapter.core.exceptions import InvalidEnvelopeError
from rube_mcp_adapter.core.models import (
    RpcRequest,
    make_error,
    make_initialize_notification,
    loads_strict,
    make_result,
)


class TestRpcRequestParse:
    """Décodage des requêtes entrantes."""

    @pytest.mark.unit
    def test_parse_full_request(self):
        req = RpcRequest.parse({"jsonrpc": "2.0", "id": 7, "method": "tools/list", "params": {"a": 1}})
        assert req.id == 7
        assert req.method == "tools/list"
        assert req.params == {"a": 1}
        assert req.is_notification is False

    @pytest.mark.unit
    def test_missing_id_is_notification(self):
        req = RpcRequest.parse({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert req.is_notification is True
        assert req.id is None

    @pytest.mark.unit
    def test_explicit_null_id_is_not_notification(self):
        req = RpcRequest.parse({"jsonrpc": "2.0", "id": None, "method": "tools/list"})
        assert req.is_notification is False

    @pytest.mark.unit
    def test_non_object_params_are_dropped(self):
        req = RpcRequest.parse({"id": "x", "method": "tools/list", "params": [1, 2]})
        assert req.params is None

    @pytest.mark.unit
    @pytest.mark.parametrize("obj", [[1, 2], "tools/list", 42, None])
    def test_non_object_raises(self, obj):
        with pytest.raises(InvalidEnvelopeError) as exc_info:
            RpcRequest.parse(obj)
        assert exc_info.value.request_id is None

    @pytest.mark.unit
    def test_missing_method_keeps_recoverable_id(self):
        with pytest.raises(InvalidEnvelopeError) as exc_info:
            RpcRequest.parse({"jsonrpc": "2.0", "id": "abc"})
        assert exc_info.value.request_id == "abc"

    @pytest.mark.unit
    def test_boolean_id_is_not_a_valid_id(self):
        req = RpcRequest.parse({"id": True, "method": "ping"})
        assert req.id is None

    @pytest.mark.unit
    def test_infinite_id_is_not_a_valid_id(self):
        req = RpcRequest.parse({"id": float("inf"), "method": "ping"})
        assert req.id is None
        assert req.is_notification is False


class TestLoadsStrict:
    """Décodage JSON strict (grammaire RFC 8259)."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["NaN", '{"a": Infinity}', "[-Infinity]"])
    def test_non_finite_constants_are_rejected(self, text):
        with pytest.raises(ValueError):
            loads_strict(text)

    @pytest.mark.unit
    def test_regular_json_is_decoded(self):
        assert loads_strict(b'{"id": 1.5, "ok": [true, null]}') == {"id": 1.5, "ok": [True, None]}


class TestEnvelopes:
    """Construction des enveloppes sortantes."""

    @pytest.mark.unit
    def test_make_result_key_order(self):
        envelope = make_result(1, {"tools": []})
        assert list(envelope) == ["jsonrpc", "id", "result"]

    @pytest.mark.unit
    def test_make_error_uses_standard_message(self):
        assert make_error(None, -32700) == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error"},
        }
        assert make_error(3, -32601)["error"]["message"] == "Method not found"
        assert make_error(3, -32603)["error"]["message"] == "Internal error"

    @pytest.mark.unit
    def test_initialize_notification_advertises_capabilities(self):
        notification = make_initialize_notification()
        assert "id" not in notification
        assert notification["method"] == "initialize"
        params = notification["params"]
        assert params["capabilities"] == {"tools": {}, "resources": {}, "prompts": {}}
        assert params["serverInfo"] == {"name": "rube-mcp-adapter", "version": "1.0.0"}
