from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

import lotus_rpc.cli as cli_mod
from lotus_rpc.client import LotusRPCClient
from lotus_rpc.config import LotusSettings
from lotus_rpc.transport import HttpxTransport

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOTUS_API_ADDRESS", "LOTUS_API_TOKEN", "LOTUS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


class TrackingClient(LotusRPCClient):
    closed = False

    def close(self) -> None:
        super().close()
        self.closed = True


def install_fake_node(monkeypatch: pytest.MonkeyPatch, handler) -> tuple[list[LotusSettings], list[TrackingClient]]:
    seen: list[LotusSettings] = []
    built: list[TrackingClient] = []

    def fake_build_client(settings: LotusSettings) -> LotusRPCClient:
        seen.append(settings)
        transport = HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        client = TrackingClient(settings.client_config(), transport=transport)
        built.append(client)
        return client

    monkeypatch.setattr(cli_mod, "_build_client", fake_build_client)
    return seen, built


def test_parse_param_decodes_json_and_keeps_plain_strings() -> None:
    assert cli_mod.parse_param("42") == 42
    assert cli_mod.parse_param('{"/": "bafy"}') == {"/": "bafy"}
    assert cli_mod.parse_param("null") is None
    assert cli_mod.parse_param("f01234") == "f01234"


def test_call_prints_result(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {"Height": 42}})

    seen, built = install_fake_node(monkeypatch, handler)

    result = runner.invoke(
        cli_mod.app,
        [
            "call",
            "ChainGetTipSetByHeight",
            "42",
            "[]",
            "--api-address",
            "http://127.0.0.1:1234/rpc/v0",
            "--config",
            str(tmp_path / "missing.toml"),
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"Height": 42}
    assert bodies == [
        {"jsonrpc": "2.0", "method": "Filecoin.ChainGetTipSetByHeight", "params": [42, []], "id": 1}
    ]
    assert seen[0].api_address == "http://127.0.0.1:1234/rpc/v0"
    assert built[0].closed


def test_call_reports_rpc_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": 1, "message": "get actor: not found"}},
        )

    install_fake_node(monkeypatch, handler)
    monkeypatch.setenv("LOTUS_API_ADDRESS", "http://127.0.0.1:1234/rpc/v0")

    result = runner.invoke(cli_mod.app, ["call", "StateGetActor", "--config", str(tmp_path / "missing.toml")])

    assert result.exit_code == 1
    assert "get actor: not found" in result.output


def test_call_reports_transport_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _, built = install_fake_node(monkeypatch, handler)

    result = runner.invoke(
        cli_mod.app,
        ["call", "ChainHead", "-a", "http://127.0.0.1:1234/rpc/v0", "--config", str(tmp_path / "missing.toml")],
    )

    assert result.exit_code == 3
    assert "connection refused" in result.output
    assert built[0].closed


def test_call_without_address_is_configuration_error(tmp_path: Path) -> None:
    result = runner.invoke(cli_mod.app, ["call", "ChainHead", "--config", str(tmp_path / "missing.toml")])

    assert result.exit_code == 2
    assert "api_address is required" in result.output


def test_version_command_runs() -> None:
    result = runner.invoke(cli_mod.app, ["version"])

    assert result.exit_code == 0
    assert "lotus-rpc version" in result.stdout
