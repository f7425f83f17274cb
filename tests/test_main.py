"""Tests for the command-line entry point."""

import os
from unittest.mock import patch

import pytest

from perplexica_mcp import main as main_module


def test_parse_args_defaults():
    """Test that unset options stay None."""
    args = main_module.parse_args([])

    assert args.transport is None
    assert args.api_url is None
    assert args.port is None


def test_apply_args_to_env(monkeypatch):
    """Test that provided options are exported to the environment."""
    args = main_module.parse_args(
        ["--api-url", "http://localhost:3000", "--provider-id", "openai", "--port", "9001"]
    )

    main_module.apply_args_to_env(args)

    assert os.environ["PERPLEXICA_API_URL"] == "http://localhost:3000"
    assert os.environ["PERPLEXICA_PROVIDER_ID"] == "openai"
    assert os.environ["PORT"] == "9001"
    assert "PERPLEXICA_CHAT_MODEL_KEY" not in os.environ


def test_main_exits_without_api_url(monkeypatch, tmp_path):
    """Test that a missing base URL stops startup."""
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        main_module.main([])

    assert exc_info.value.code == 1


def test_main_runs_server(monkeypatch, tmp_path):
    """Test that main builds the server and runs it with the settings."""
    monkeypatch.chdir(tmp_path)

    with patch.object(main_module, "PerplexicaServer") as server_cls:
        main_module.main(["--api-url", "http://localhost:3000", "--transport", "stdio"])

    settings = server_cls.call_args.args[0]
    assert settings.perplexica_api_url == "http://localhost:3000"
    server_cls.return_value.run.assert_called_once_with(
        transport="stdio", host="127.0.0.1", port=8000
    )
