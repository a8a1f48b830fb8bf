# tests/test_assistant.py

from types import SimpleNamespace


def _reply(mock_gemini, text):
    mock_gemini.generate_content.return_value = SimpleNamespace(text=text)


def test_chat_without_api_key(client, monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    res = client.post("/api/assistant/chat", json={"message": "coffee shop"})
    assert res.status_code == 503


def test_chat_applies_validated_updates(client, mock_gemini, gemini_key):
    _reply(mock_gemini, '{"ageRange": [25, 35], "selectedEthnicities": ["korean", "klingon"], "message": "Updated."}')

    res = client.post(
        "/api/assistant/chat",
        json={"message": "I want to open a bookstore", "currentState": {"rentRange": [40, 90]}},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["message"] == "Updated."
    assert data["businessType"] == "general"
    assert data["filters"]["ageRange"] == [25, 35]
    assert data["filters"]["selectedEthnicities"] == ["korean"]
    # carried over from the current state
    assert data["filters"]["rentRange"] == [40, 90]


def test_chat_prompt_contains_current_state(client, mock_gemini, gemini_key):
    _reply(mock_gemini, '{"message": "ok"}')
    client.post("/api/assistant/chat", json={"message": "a cocktail bar", "currentState": {"ageRange": [30, 40]}})

    prompt = mock_gemini.generate_content.call_args.args[0]
    assert "a cocktail bar" in prompt
    assert '"ageRange"' in prompt


def test_chat_reset(client, mock_gemini, gemini_key):
    _reply(mock_gemini, '{"intent": "reset", "message": "Okay, I\'ve reset all filters."}')

    res = client.post("/api/assistant/chat", json={"message": "start over", "currentState": {"ageRange": [30, 40]}})
    data = res.json()
    assert data["intent"] == "reset"
    assert data["filters"] == client.get("/api/filters/defaults").json()


def test_chat_invalid_model_reply(client, mock_gemini, gemini_key):
    _reply(mock_gemini, "Sure! Here are your filters.")
    res = client.post("/api/assistant/chat", json={"message": "a bakery"})
    assert res.status_code == 502
    assert res.json()["detail"] == "Invalid JSON response from AI"


def test_chat_model_failure(client, mock_gemini, gemini_key):
    mock_gemini.generate_content.side_effect = RuntimeError("quota exceeded")
    res = client.post("/api/assistant/chat", json={"message": "a bakery"})
    assert res.status_code == 503
    assert "quota exceeded" in res.json()["detail"]
