from __future__ import annotations

import pytest
import requests

from milk_imagegen.core.runtime import AgentRuntime
from milk_imagegen.core.types import ModelClass
from milk_imagegen.errors import LLMConfigurationError
from milk_imagegen.llm import provider_config
from milk_imagegen.llm.service import generate_text
from tests.conftest import FakeResponse


def _capture_post(monkeypatch, response):
    captured = {}

    def fake_post(url, headers=None, json=None, timeout=None):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        return response

    monkeypatch.setattr(requests, "post", fake_post)
    return captured


def _completion(text):
    return FakeResponse(json_data={"choices": [{"message": {"content": text}}]})


def test_generate_text_sends_system_prompt_and_user_context(monkeypatch):
    captured = _capture_post(monkeypatch, _completion("  A cat in a hat, soft light  \n"))
    runtime = AgentRuntime(settings={"OPENAI_API_KEY": "sk-test"})

    text = generate_text(runtime, "draw my cat", ModelClass.MEDIUM, "be brief")

    assert text == "A cat in a hat, soft light"
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer sk-test"
    assert captured["json"]["model"] == provider_config.MODEL_NAMES[ModelClass.MEDIUM]
    assert captured["json"]["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "draw my cat"},
    ]
    assert captured["timeout"] == 120


def test_model_class_can_be_overridden_by_runtime_setting(monkeypatch):
    captured = _capture_post(monkeypatch, _completion("ok"))
    runtime = AgentRuntime(settings={"OPENAI_API_KEY": "sk-test", "MEDIUM_MODEL": "gpt-4.1"})

    generate_text(runtime, "hi", ModelClass.MEDIUM)

    assert captured["json"]["model"] == "gpt-4.1"
    assert captured["json"]["messages"] == [{"role": "user", "content": "hi"}]


def test_http_error_propagates(monkeypatch):
    _capture_post(monkeypatch, FakeResponse(status_code=503, reason="Service Unavailable"))
    with pytest.raises(requests.HTTPError):
        generate_text(AgentRuntime(settings={"OPENAI_API_KEY": "sk-test"}), "hi")


def test_missing_key_raises_configuration_error():
    with pytest.raises(LLMConfigurationError, match="OPENAI_API_KEY"):
        generate_text(AgentRuntime(), "hi")


def test_unknown_provider_raises_configuration_error():
    with pytest.raises(LLMConfigurationError, match="Unknown LLM provider"):
        generate_text(AgentRuntime(settings={"PROVIDER": "nope"}), "hi")


def test_anthropic_payload_moves_system_prompt(monkeypatch):
    captured = _capture_post(
        monkeypatch, FakeResponse(json_data={"content": [{"text": " neon fox "}]})
    )
    runtime = AgentRuntime(settings={"PROVIDER": "anthropic", "ANTHROPIC_API_KEY": "ak-test"})

    text = generate_text(runtime, "a fox", ModelClass.SMALL, "be brief")

    assert text == "neon fox"
    assert captured["headers"]["x-api-key"] == "ak-test"
    assert captured["json"]["system"] == "be brief"
    assert captured["json"]["messages"] == [{"role": "user", "content": "a fox"}]
    assert captured["json"]["max_tokens"] == 1024


def test_api_key_falls_back_to_key_file(tmp_path, monkeypatch):
    captured = _capture_post(monkeypatch, _completion("ok"))
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "openai.key").write_text("sk-from-file\n")

    generate_text(AgentRuntime(), "hi")

    assert captured["headers"]["Authorization"] == "Bearer sk-from-file"
