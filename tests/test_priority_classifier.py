from types import SimpleNamespace

import pytest

from src.core import LLMException
from src.infrastructure.llm import ILLMClient, MockLLMClient, OpenAICompatibleLLMClient
from src.tickets.application import PriorityClassificationService
from src.tickets.domain import PriorityPromptBuilder, normalize_priority


@pytest.mark.parametrize("reply, expected", [
    ("Alta", "Alta"),
    ("media", "Media"),
    ("BAJA.", "Baja"),
    ("  Prioridad: ¡Alta!  ", "Alta"),
    ("alta o media", "Alta"),
    ("media-baja", "Media"),
    ("Entrada inválida", "Baja"),
    ("Urgente", "Baja"),
    ("", "Baja"),
    (None, "Baja"),
])
def test_normalize_priority(reply, expected):
    assert normalize_priority(reply) == expected


def test_prompt_has_instruction_and_problem_turn():
    messages = PriorityPromptBuilder.build_messages("La VPN se desconecta")

    assert [m["role"] for m in messages] == ["system", "user"]
    assert "Entrada inválida" in messages[0]["content"]
    assert messages[1]["content"] == "Problema: La VPN se desconecta"


class FailingLLMClient(ILLMClient):
    async def chat_completion(self, messages, temperature=0.0, max_tokens=10,
                              operation="chat_completion", extra_body=None):
        raise LLMException("Request timed out")


class RecordingLLMClient(MockLLMClient):
    def __init__(self, reply):
        super().__init__(reply)
        self.kwargs = None

    async def chat_completion(self, messages, **kwargs):
        self.kwargs = kwargs
        return await super().chat_completion(messages, **kwargs)


async def test_classify_uses_model_reply():
    service = PriorityClassificationService(MockLLMClient(reply="Media"))

    assert await service.classify("El correo tarda en llegar") == "Media"


async def test_classify_request_shape():
    client = RecordingLLMClient("Alta")
    service = PriorityClassificationService(client, max_tokens=10, reasoning=True)

    await service.classify("Servidor caído")

    assert client.kwargs["temperature"] == 0
    assert client.kwargs["max_tokens"] == 10
    assert client.kwargs["extra_body"] == {"reasoning": {"enabled": True}}


async def test_classify_without_reasoning_sends_no_extra_body():
    client = RecordingLLMClient("Alta")
    service = PriorityClassificationService(client, reasoning=False)

    await service.classify("Servidor caído")

    assert client.kwargs["extra_body"] is None


async def test_classify_failure_defaults_to_low():
    service = PriorityClassificationService(FailingLLMClient())

    assert await service.classify("Servidor caído") == "Baja"


async def test_classify_unconfigured_defaults_to_low():
    service = PriorityClassificationService(None)

    assert not service.is_configured
    assert await service.classify("Servidor caído") == "Baja"
    await service.close()


def _completion(content, prompt_tokens=12, completion_tokens=1):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return self.response


def _fake_openai(completions):
    async def close():
        pass
    return SimpleNamespace(chat=SimpleNamespace(completions=completions), close=close)


async def test_openai_client_returns_reply_text():
    completions = FakeCompletions(response=_completion("Alta"))
    client = OpenAICompatibleLLMClient(api_key="k", model="test-model", client=_fake_openai(completions))

    result = await client.chat_completion(
        PriorityPromptBuilder.build_messages("Sin red"), temperature=0, max_tokens=10
    )

    assert result.content == "Alta"
    assert result.total_tokens == 13
    assert completions.requests[0]["model"] == "test-model"
    assert completions.requests[0]["max_tokens"] == 10


async def test_openai_client_wraps_transport_errors():
    completions = FakeCompletions(error=RuntimeError("connection refused"))
    client = OpenAICompatibleLLMClient(api_key="k", client=_fake_openai(completions))

    with pytest.raises(LLMException):
        await client.chat_completion([{"role": "user", "content": "x"}])


async def test_openai_client_rejects_empty_reply():
    completions = FakeCompletions(response=_completion(None))
    client = OpenAICompatibleLLMClient(api_key="k", client=_fake_openai(completions))

    with pytest.raises(LLMException):
        await client.chat_completion([{"role": "user", "content": "x"}])


async def test_service_survives_empty_reply():
    completions = FakeCompletions(response=_completion(None))
    client = OpenAICompatibleLLMClient(api_key="k", client=_fake_openai(completions))
    service = PriorityClassificationService(client)

    assert await service.classify("Sin red") == "Baja"
    await service.close()
