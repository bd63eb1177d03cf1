import json
from unittest.mock import MagicMock

import pytest

from mcp_candy_machine import config
from mcp_candy_machine import server

CANDY_MACHINE = "cndy3Z4yapfJBmL3ShUp5exZKqR3z33thTzeNMm2gRZ"


@pytest.mark.asyncio
async def test_validate_candy_config(document):
    mock_context = MagicMock()
    result = await server.validate_candy_config(context=mock_context, config_json=json.dumps(document))

    assert result == (
        "Configuration is valid: 100 items at 1.5 SOL (1500000000 lamports), upload method bundlr."
    )


@pytest.mark.asyncio
async def test_validate_candy_config_reports_first_error(document):
    document["uploadMethod"] = "dropbox"
    mock_context = MagicMock()
    result = await server.validate_candy_config(context=mock_context, config_json=json.dumps(document))

    assert result.startswith("Error: uploadMethod: Unknown UploadMethod 'dropbox'")


@pytest.mark.asyncio
async def test_validate_candy_config_rejects_empty_and_oversized_input():
    mock_context = MagicMock()
    assert await server.validate_candy_config(context=mock_context, config_json="") == (
        "Error: Configuration JSON must be a non-empty string"
    )

    oversized = json.dumps({"padding": "x" * config.MAX_CONFIG_BYTES})
    result = await server.validate_candy_config(context=mock_context, config_json=oversized)
    assert "too large" in result


@pytest.mark.asyncio
async def test_validate_candy_config_malformed_json():
    mock_context = MagicMock()
    result = await server.validate_candy_config(context=mock_context, config_json="{price: 1")
    assert result.startswith("Error: <document>: Invalid JSON")


@pytest.mark.asyncio
async def test_get_candy_machine_data(document):
    mock_context = MagicMock()
    result = await server.get_candy_machine_data(
        context=mock_context,
        config_json=json.dumps(document),
        candy_machine=CANDY_MACHINE,
        symbol="CANDY",
        seller_fee_basis_points=500,
    )
    data = json.loads(result)

    assert data["uuid"] == "cndy3Z"
    assert data["price"] == 1500000000
    assert data["items_available"] == 100
    assert data["go_live_date"] == 1640995200
    assert data["symbol"] == "CANDY"
    assert data["seller_fee_basis_points"] == 500
    assert data["whitelist_mint_settings"]["discount_price"] == 500000000
    assert data["gatekeeper"]["gatekeeper_network"] == document["gatekeeper"]["gatekeeper_network"]


@pytest.mark.asyncio
async def test_get_candy_machine_data_is_deterministic(document):
    mock_context = MagicMock()
    kwargs = dict(
        context=mock_context,
        config_json=json.dumps(document),
        candy_machine=CANDY_MACHINE,
        symbol="",
        seller_fee_basis_points=0,
    )
    assert await server.get_candy_machine_data(**kwargs) == await server.get_candy_machine_data(**kwargs)


@pytest.mark.asyncio
async def test_get_candy_machine_data_invalid_candy_machine(document):
    mock_context = MagicMock()
    result = await server.get_candy_machine_data(
        context=mock_context,
        config_json=json.dumps(document),
        candy_machine="not-a-valid-address",
        symbol="",
        seller_fee_basis_points=0,
    )
    assert result.startswith("Error: Invalid address 'not-a-valid-address'")


@pytest.mark.asyncio
async def test_get_candy_machine_data_rejects_bad_royalty(document):
    mock_context = MagicMock()
    result = await server.get_candy_machine_data(
        context=mock_context,
        config_json=json.dumps(document),
        candy_machine=CANDY_MACHINE,
        symbol="",
        seller_fee_basis_points=10001,
    )
    assert result == "Error: Seller fee basis points must be between 0 and 10000"


@pytest.mark.asyncio
async def test_get_candy_machine_data_bad_go_live_date(document):
    document["goLiveDate"] = "2022-01-01"
    mock_context = MagicMock()
    result = await server.get_candy_machine_data(
        context=mock_context,
        config_json=json.dumps(document),
        candy_machine=CANDY_MACHINE,
        symbol="",
        seller_fee_basis_points=0,
    )
    assert result.startswith("Error: goLiveDate: Invalid RFC 3339 timestamp")


@pytest.mark.asyncio
async def test_get_go_live_timestamp(document):
    mock_context = MagicMock()
    result = await server.get_go_live_timestamp(context=mock_context, config_json=json.dumps(document))
    assert json.loads(result) == {"goLiveDate": "2022-01-01T00:00:00Z", "timestamp": 1640995200}


@pytest.mark.asyncio
async def test_get_solana_config():
    mock_context = MagicMock()
    result = json.loads(await server.get_solana_config(context=mock_context))

    assert result["json_rpc_url"] == config.RPC_ENDPOINT
    assert result["keypair_path"] == config.KEYPAIR_PATH
    assert result["commitment"] == config.COMMITMENT
