import pytest
import requests

from aibridge.client.models import InvalidPromptError
from aibridge.prompt import Prompt, assistant_message, function_message, system_message, user_message
from aibridge.vertexai.api import (
    DEFAULT_BASE_URL,
    GenerateMessageRequest,
    MessagePrompt,
    VertexAiApi,
    VertexMessage,
)
from aibridge.vertexai.chat import VertexAiChatClient
from aibridge.vertexai.embedding import VertexAiEmbeddingClient
from tests.fakes import FakeResponse, FakeSession


def _api(*responses):
    sess = FakeSession(*responses)
    return VertexAiApi(api_key="k-123", session=sess), sess


def test_request_separates_context_from_turns():
    api, sess = _api()
    client = VertexAiChatClient(api)
    request = client.build_request(Prompt([system_message("ctx"), user_message("hi")]))
    assert request.prompt.context == "ctx"
    assert request.prompt.messages == [VertexMessage("user", "hi")]
    assert sess.calls == []


def test_request_joins_system_messages_and_drops_function_role():
    api, _ = _api()
    prompt = Prompt([
        system_message("a"),
        user_message("q1"),
        function_message("42", name="calc"),
        assistant_message("r1"),
        system_message("b"),
        user_message("q2"),
    ])
    request = VertexAiChatClient(api).build_request(prompt)
    assert request.prompt.context == "a\nb"
    assert [(m.author, m.content) for m in request.prompt.messages] == [
        ("user", "q1"), ("assistant", "r1"), ("user", "q2"),
    ]


def test_system_only_prompt_is_rejected_before_any_call():
    api, sess = _api(FakeResponse({"candidates": []}))
    client = VertexAiChatClient(api)
    with pytest.raises(InvalidPromptError):
        client.generate(Prompt(system_message("only context")))
    assert sess.calls == []


def test_generate_sends_settings_and_maps_candidates():
    payload = {
        "candidates": [
            {"author": "1", "content": "Blue."},
            {"author": "1", "content": "Azure.", "citationMetadata": {"citationSources": []}},
        ],
        "messages": [{"author": "0", "content": "sky?"}],
        "filters": [{"reason": "OTHER"}],
    }
    api, sess = _api(FakeResponse(payload))
    client = VertexAiChatClient(api, temperature=0.2, top_p=0.9, top_k=40, candidate_count=2)

    response = client.generate(Prompt([system_message("Be brief"), user_message("sky?")]))

    assert [g.text for g in response.generations] == ["Blue.", "Azure."]
    assert response.generations[0].properties["author"] == "1"
    assert "citationMetadata" in response.generations[1].properties
    assert response.provider_output["filters"] == [{"reason": "OTHER"}]

    call = sess.calls[0]
    assert call["url"] == f"{DEFAULT_BASE_URL}/models/chat-bison-001:generateMessage"
    assert call["params"] == {"key": "k-123"}
    assert call["json"] == {
        "prompt": {"context": "Be brief", "messages": [{"author": "user", "content": "sky?"}]},
        "temperature": 0.2,
        "candidateCount": 2,
        "topP": 0.9,
        "topK": 40,
    }


def test_unset_sampling_values_are_omitted():
    body = GenerateMessageRequest(MessagePrompt("", [VertexMessage("user", "x")])).to_dict()
    assert body == {"prompt": {"messages": [{"author": "user", "content": "x"}]}}


def test_http_error_propagates():
    api, _ = _api(FakeResponse({"error": {"code": 400}}, status_code=400))
    with pytest.raises(requests.HTTPError):
        VertexAiChatClient(api).generate(Prompt("hi"))


def test_missing_candidates_propagates_as_key_error():
    api, _ = _api(FakeResponse({"filters": [{"reason": "SAFETY"}]}))
    with pytest.raises(KeyError):
        VertexAiChatClient(api).generate(Prompt("hi"))


def test_api_requires_key():
    with pytest.raises(ValueError):
        VertexAiApi(api_key="", session=FakeSession())


def test_count_tokens_and_models():
    api, sess = _api(
        FakeResponse({"tokenCount": 7}),
        FakeResponse({"models": [{"name": "models/chat-bison-001"}], "nextPageToken": "p2"}),
        FakeResponse({"models": [{"name": "models/embedding-gecko-001"}]}),
        FakeResponse({"name": "models/chat-bison-001", "inputTokenLimit": 4096}),
    )
    assert api.count_message_tokens(MessagePrompt("", [VertexMessage("user", "hi")])) == 7
    assert api.list_models() == ["models/chat-bison-001", "models/embedding-gecko-001"]
    assert sess.calls[2]["params"] == {"key": "k-123", "pageToken": "p2"}
    assert api.get_model("models/chat-bison-001")["inputTokenLimit"] == 4096
    assert sess.calls[3]["url"].endswith("/models/chat-bison-001")


def test_embedding_client():
    api, sess = _api(
        FakeResponse({"embedding": {"value": [0.1, 0.2, 0.3]}}),
        FakeResponse({"embeddings": [{"value": [1, 2]}, {"value": [3, 4]}]}),
    )
    client = VertexAiEmbeddingClient(api)
    assert client.embed("hello") == [0.1, 0.2, 0.3]
    assert sess.calls[0]["json"] == {"text": "hello"}
    assert sess.calls[0]["url"].endswith("/models/embedding-gecko-001:embedText")

    response = client.embed_for_response(["a", "b"])
    assert [(e.index, e.embedding) for e in response.data] == [(0, [1.0, 2.0]), (1, [3.0, 4.0])]
    assert sess.calls[1]["json"] == {"texts": ["a", "b"]}
    assert client.embed_all([]) == []


def test_embedding_dimensions_probe_once():
    api, sess = _api(FakeResponse({"embedding": {"value": [0.0] * 768}}))
    client = VertexAiEmbeddingClient(api)
    assert client.dimensions() == 768
    assert client.dimensions() == 768
    assert len(sess.calls) == 1
