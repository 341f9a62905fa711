"""Tests for the reader CLI commands."""

# pylint: disable=missing-function-docstring,redefined-outer-name

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from engine_fakes import FakeClock, FakeCorpus, FakeOpenAIClient, FakeScriptureSource, passage
from scripture_engine.cli import main_app
from scripture_engine.cli import reader as reader_cli
from scripture_engine.services import ServiceContainer, build_default_services
from scripture_engine.services.ai_gateway import AIGateway, CooldownGate

runner = CliRunner()


@pytest.fixture
def ai_client() -> FakeOpenAIClient:
    return FakeOpenAIClient(["Genesis 1:1; Colossians 1:16"])


@pytest.fixture
def services(monkeypatch: pytest.MonkeyPatch, ai_client: FakeOpenAIClient) -> ServiceContainer:
    source = FakeScriptureSource(
        {
            ("John 1", "kjv"): passage("John 1", (1, "In the beginning was the Word")),
            ("John 1", "web"): passage("John 1", (1, "In the beginning was the Word.")),
        }
    )
    gateway = AIGateway(
        api_key="sk-test",
        client_factory=lambda _key: ai_client,
        cooldown=CooldownGate(60, clock=FakeClock()),
    )
    container = build_default_services(
        source_port=source,
        corpus_port=FakeCorpus({(42, 0, 0): "ఆదియందు వాక్యముండెను"}),
        gateway=gateway,
    )
    monkeypatch.setattr(reader_cli, "_get_services", lambda: container)
    return container


def test_resolve(services: ServiceContainer) -> None:  # pylint: disable=unused-argument
    result = runner.invoke(main_app, ["reader", "resolve", "1sam"])
    assert result.exit_code == 0
    assert "1 Samuel" in result.output

    missing = runner.invoke(main_app, ["reader", "resolve", "Genisis"])
    assert missing.exit_code == 1
    assert "Genesis" in missing.output


def test_parse(services: ServiceContainer) -> None:  # pylint: disable=unused-argument
    result = runner.invoke(main_app, ["reader", "parse", "John 3:16; Rom 8:28-30"])
    assert result.exit_code == 0
    assert "John 3:16" in result.output
    assert "Romans 8:28-30" in result.output

    none = runner.invoke(main_app, ["reader", "parse", "grace"])
    assert none.exit_code == 1


def test_chapter(services: ServiceContainer) -> None:  # pylint: disable=unused-argument
    result = runner.invoke(main_app, ["reader", "chapter", "John", "1", "--secondary"])
    assert result.exit_code == 0
    assert "In the beginning was the Word" in result.output
    assert "ఆదియందు వాక్యముండెను" in result.output

    invalid = runner.invoke(main_app, ["reader", "chapter", "John", "40"])
    assert invalid.exit_code == 1
    assert "Invalid chapter for John." in invalid.output

    empty = runner.invoke(main_app, ["reader", "chapter", "John", "2"])
    assert empty.exit_code == 1


def test_analyze(services: ServiceContainer, ai_client: FakeOpenAIClient) -> None:
    # pylint: disable=unused-argument
    unknown = runner.invoke(main_app, ["reader", "analyze", "jn", "1", "1"])
    assert unknown.exit_code == 1

    result = runner.invoke(main_app, ["reader", "analyze", "John", "1", "1"])
    assert result.exit_code == 0
    assert "Colossians 1:16" in result.output
    assert "John 1:1" in ai_client.responses.calls[0]["input"]
