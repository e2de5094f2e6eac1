"""Tests for CLI wiring and overrides."""

import re
from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest
import typer
from typer.testing import CliRunner

from shopify_tools import cli
from shopify_tools.config import ShopifyConfig
from shopify_tools.exceptions import MissingEnvVarError

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


@dataclass
class FakeServer:
    """Stands in for FastMCP; records `run()` instead of serving stdio."""

    runs: int = 0

    def run(self) -> None:
        self.runs += 1


@dataclass
class RecordingBuilder:
    server: FakeServer = field(default_factory=FakeServer)
    configs: list[ShopifyConfig] = field(default_factory=list)

    def __call__(self, *, config: ShopifyConfig) -> FakeServer:
        self.configs.append(config)
        config.validate()
        return self.server


def _use_config(monkeypatch: pytest.MonkeyPatch, config: ShopifyConfig) -> list[str | None]:
    paths: list[str | None] = []

    def fake_from_env(cls: type[ShopifyConfig], dotenv_path: str | None = None) -> ShopifyConfig:
        _ = cls
        paths.append(dotenv_path)
        return config

    monkeypatch.setattr(cli.ShopifyConfig, "from_env", classmethod(fake_from_env))
    return paths


def _build_app(builder: RecordingBuilder) -> typer.Typer:
    return cli.create_app(builder)  # type: ignore[arg-type]


COMPLETE = ShopifyConfig(access_token="shpat_1234567890", shop_domain="demo.myshopify.com")


def test_serve_runs_built_server_with_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    paths = _use_config(monkeypatch, COMPLETE)
    builder = RecordingBuilder()

    result = runner.invoke(
        _build_app(builder),
        ["--env-file", "custom.env", "serve", "--api-version", "2025-01", "--log-level", "debug"],
    )

    assert result.exit_code == 0
    assert paths == ["custom.env"]
    assert builder.server.runs == 1
    assert builder.configs[0].api_version == "2025-01"
    assert builder.configs[0].log_level == "DEBUG"


def test_serve_exits_when_credentials_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, ShopifyConfig(shop_domain="demo.myshopify.com"))
    builder = RecordingBuilder()

    result = runner.invoke(_build_app(builder), ["serve"])

    assert result.exit_code == 1
    assert builder.server.runs == 0


def test_check_config_reports_complete_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, COMPLETE)

    result = runner.invoke(_build_app(RecordingBuilder()), ["check-config"])

    plain_output = _strip_ansi(result.output)
    assert result.exit_code == 0
    assert "shop_domain: demo.myshopify.com" in plain_output
    assert "access_token: shpa...7890" in plain_output
    assert "shpat_1234567890" not in plain_output
    assert "✓ Configuration complete" in plain_output


def test_check_config_fails_without_token(monkeypatch: pytest.MonkeyPatch) -> None:
    _use_config(monkeypatch, ShopifyConfig(shop_domain="demo.myshopify.com"))

    result = runner.invoke(_build_app(RecordingBuilder()), ["check-config"])

    plain_output = _strip_ansi(result.output)
    assert result.exit_code == 1
    assert "access_token: <unset>" in plain_output
    assert "SHOPIFY_ACCESS_TOKEN environment variable is required" in plain_output


def test_context_must_be_initialised() -> None:
    ctx = SimpleNamespace(obj=None)

    with pytest.raises(cli.CliContextNotInitialisedError):
        cli._get_context(ctx)  # type: ignore[arg-type]


def test_builder_errors_other_than_missing_env_propagate(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _use_config(monkeypatch, COMPLETE)

    def failing_builder(*, config: ShopifyConfig) -> FakeServer:
        _ = config
        raise RuntimeError("boom")

    result = runner.invoke(cli.create_app(failing_builder), ["serve"])  # type: ignore[arg-type]

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
    assert not isinstance(result.exception, MissingEnvVarError)
