from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import openai
import pytest
from google.auth.exceptions import DefaultCredentialsError, RefreshError
from google.genai import errors as genai_errors

from agentstore.core.config import Settings
from agentstore.llm.claude import ClaudeProvider
from agentstore.llm.errors import (
    EmptyResponseError,
    GenerationError,
    ProviderAuthError,
    ProviderConfigError,
    ProviderQuotaError,
    ProviderUnavailableError,
    classify_failure,
)
from agentstore.llm.gemini import PRIMING_REPLY, GeminiProvider
from agentstore.llm.handle import ProviderHandle, build_provider
from agentstore.llm.openai_chat import OpenAIProvider

PROMPT = "You are a helpful travel assistant that suggests destinations."


def _status_response(code):
    return httpx.Response(code, request=httpx.Request("POST", "https://api.example.test/v1"))


# ── Gemini ────────────────────────────────────────────────────────────────────

def _gemini_reply(*texts):
    parts = [SimpleNamespace(text=t) for t in texts]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


@pytest.fixture
def gemini_client():
    return MagicMock()


@pytest.fixture
def gemini(gemini_client):
    return GeminiProvider("proj", "us-central1", "gemini-2.5-flash", 1024, client=gemini_client)


def test_gemini_seeds_persona_then_sends_message(gemini, gemini_client):
    chat = gemini_client.chats.create.return_value
    chat.send_message.return_value = _gemini_reply("Day 1: Colosseum", "ignored")

    assert gemini.generate(PROMPT, "Plan a 3-day trip to Rome") == "Day 1: Colosseum"

    history = gemini_client.chats.create.call_args.kwargs["history"]
    assert [c.role for c in history] == ["user", "model"]
    assert history[0].parts[0].text == f"SYSTEM INSTRUCTION: {PROMPT}"
    assert history[1].parts[0].text == PRIMING_REPLY
    chat.send_message.assert_called_once_with("Plan a 3-day trip to Rome")


@pytest.mark.parametrize(
    "reply",
    [
        SimpleNamespace(candidates=[]),
        SimpleNamespace(candidates=None),
        SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]),
        _gemini_reply(""),
    ],
)
def test_gemini_without_text_is_empty_response(gemini, gemini_client, reply):
    gemini_client.chats.create.return_value.send_message.return_value = reply

    with pytest.raises(EmptyResponseError):
        gemini.generate(PROMPT, "hi")


def test_gemini_skips_empty_leading_parts(gemini, gemini_client):
    gemini_client.chats.create.return_value.send_message.return_value = _gemini_reply("", "Ciao")

    assert gemini.generate(PROMPT, "hi") == "Ciao"


@pytest.mark.parametrize(
    "exc,expected",
    [
        (genai_errors.ClientError(403, {"error": {"code": 403, "message": "Permission denied", "status": "PERMISSION_DENIED"}}), ProviderAuthError),
        (genai_errors.ClientError(429, {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}}), ProviderQuotaError),
        (genai_errors.ClientError(400, {"error": {"code": 400, "message": "Bad request", "status": "INVALID_ARGUMENT"}}), GenerationError),
        (genai_errors.ServerError(503, {"error": {"code": 503, "message": "Unavailable", "status": "UNAVAILABLE"}}), ProviderUnavailableError),
        (httpx.ConnectError("connection refused"), ProviderUnavailableError),
        (DefaultCredentialsError("Your default credentials were not found"), ProviderAuthError),
        (RefreshError("Unable to acquire impersonated credentials"), ProviderAuthError),
    ],
)
def test_gemini_error_mapping(gemini, gemini_client, exc, expected):
    gemini_client.chats.create.return_value.send_message.side_effect = exc

    with pytest.raises(expected):
        gemini.generate(PROMPT, "hi")


def test_gemini_programming_errors_propagate(gemini, gemini_client):
    gemini_client.chats.create.return_value.send_message.side_effect = TypeError("unexpected keyword")

    with pytest.raises(TypeError, match="unexpected keyword"):
        gemini.generate(PROMPT, "hi")


# ── OpenAI ────────────────────────────────────────────────────────────────────

def test_openai_sends_system_and_user_messages():
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="Day 1: ..."))]
    )
    provider = OpenAIProvider("sk-test", "gpt-4o-mini", 256, client=client)

    assert provider.generate(PROMPT, "Rome?") == "Day 1: ..."

    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"] == [
        {"role": "system", "content": PROMPT},
        {"role": "user", "content": "Rome?"},
    ]


@pytest.mark.parametrize("choices", [[], [SimpleNamespace(message=SimpleNamespace(content=None))]])
def test_openai_without_text_is_empty_response(choices):
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(choices=choices)

    with pytest.raises(EmptyResponseError):
        OpenAIProvider("sk-test", "gpt-4o-mini", 256, client=client).generate(PROMPT, "hi")


@pytest.mark.parametrize(
    "exc,expected",
    [
        (openai.AuthenticationError("bad key", response=_status_response(401), body=None), ProviderAuthError),
        (openai.RateLimitError("insufficient_quota", response=_status_response(429), body=None), ProviderQuotaError),
        (openai.InternalServerError("boom", response=_status_response(500), body=None), ProviderUnavailableError),
        (openai.APIConnectionError(request=httpx.Request("POST", "https://api.example.test")), ProviderUnavailableError),
        (openai.BadRequestError("context length", response=_status_response(400), body=None), GenerationError),
    ],
)
def test_openai_error_mapping(exc, expected):
    client = MagicMock()
    client.chat.completions.create.side_effect = exc

    with pytest.raises(expected):
        OpenAIProvider("sk-test", "gpt-4o-mini", 256, client=client).generate(PROMPT, "hi")


# ── Claude ────────────────────────────────────────────────────────────────────

def test_claude_uses_system_parameter():
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(
        content=[SimpleNamespace(type="text", text="Bonjour")]
    )
    provider = ClaudeProvider("key", "claude-haiku-4-5-20251001", 512, client=client)

    assert provider.generate(PROMPT, "Paris?") == "Bonjour"

    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["system"] == PROMPT
    assert kwargs["messages"] == [{"role": "user", "content": "Paris?"}]
    assert kwargs["max_tokens"] == 512


def test_claude_without_text_block_is_empty_response():
    client = MagicMock()
    client.messages.create.return_value = SimpleNamespace(content=[])

    with pytest.raises(EmptyResponseError):
        ClaudeProvider("key", "m", 512, client=client).generate(PROMPT, "hi")


def test_claude_rate_limit_is_quota():
    client = MagicMock()
    client.messages.create.side_effect = anthropic.RateLimitError(
        "rate limited", response=_status_response(429), body=None
    )

    with pytest.raises(ProviderQuotaError):
        ClaudeProvider("key", "m", 512, client=client).generate(PROMPT, "hi")


# ── Text classification ──────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text,expected",
    [
        ("API key not valid", ProviderAuthError),
        ("Permission denied on resource project", ProviderAuthError),
        ("Quota exceeded for aiplatform", ProviderQuotaError),
        ("Rate limit reached", ProviderQuotaError),
        ("Candidate was blocked due to SAFETY", GenerationError),
    ],
)
def test_classify_failure(text, expected):
    assert type(classify_failure(RuntimeError(text))) is expected


# ── Construction ──────────────────────────────────────────────────────────────

def _settings(**env):
    return Settings(_env_file=None, **env)


@pytest.mark.parametrize(
    "env,missing",
    [
        ({"LLM_PROVIDER": "vertexai", "GOOGLE_PROJECT_ID": ""}, "GOOGLE_PROJECT_ID"),
        ({"LLM_PROVIDER": "openai", "OPENAI_API_KEY": ""}, "OPENAI_API_KEY"),
        ({"LLM_PROVIDER": "anthropic", "ANTHROPIC_API_KEY": ""}, "ANTHROPIC_API_KEY"),
    ],
)
def test_build_provider_requires_credentials(env, missing):
    with pytest.raises(ProviderConfigError, match=missing):
        build_provider(_settings(**env))


def test_build_provider_selects_adapter():
    provider = build_provider(_settings(LLM_PROVIDER="openai", OPENAI_API_KEY="sk-test"))
    assert isinstance(provider, OpenAIProvider)


def test_build_provider_wraps_constructor_failure(mocker):
    mocker.patch("agentstore.llm.handle.GeminiProvider", side_effect=RuntimeError("no ADC found"))

    with pytest.raises(ProviderConfigError, match="no ADC found"):
        build_provider(_settings(LLM_PROVIDER="vertexai", GOOGLE_PROJECT_ID="proj"))


def test_handle_caches_initialization_error(mocker):
    build = mocker.patch(
        "agentstore.llm.handle.build_provider",
        side_effect=ProviderConfigError("GOOGLE_PROJECT_ID environment variable is not set"),
    )
    handle = ProviderHandle.initialize(_settings())

    assert not handle.ready
    with pytest.raises(ProviderConfigError) as first:
        handle.get()
    with pytest.raises(ProviderConfigError) as second:
        handle.get()
    assert first.value is second.value
    assert build.call_count == 1


def test_handle_returns_provider(mocker):
    sentinel = SimpleNamespace(name="stub", generate=lambda system_prompt, user_message: "ok")
    mocker.patch("agentstore.llm.handle.build_provider", return_value=sentinel)

    handle = ProviderHandle.initialize(_settings())

    assert handle.ready
    assert handle.get() is sentinel


def test_handle_needs_exactly_one_outcome():
    with pytest.raises(ValueError):
        ProviderHandle()
