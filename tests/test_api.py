from topic_quiz.errors import ProviderError

from helpers import questions_json

ITEM = {"question": "Q", "options": ["A", "B", "C", "D"], "answer": 1, "chosenAnswer": 1}


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_generate_questions_success(client, model):
    model.responses.append(questions_json(3))
    r = client.post("/api/generate-questions", json={"topic": "Space", "count": 3})
    assert r.status_code == 200
    quizzes = r.json()["quizzes"]
    assert len(quizzes) == 3
    assert quizzes[0] == {"question": "Q1", "options": ["A", "B", "C", "D"], "answer": 1, "chosenAnswer": None}


def test_generate_questions_embedded_array(client, model):
    model.responses.append('Here you go: [{"question":"Q1","options":["A","B","C","D"],"answer":2}]')
    r = client.post("/api/generate-questions", json={"topic": "Space", "count": 1})
    assert r.status_code == 200
    assert r.json()["quizzes"][0]["answer"] == 2


def test_generate_questions_count_defaults_to_five(client, model):
    model.responses.append(questions_json(9))
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 200
    assert len(r.json()["quizzes"]) == 5


def test_blank_topic_is_client_error_without_model_call(client, model):
    r = client.post("/api/generate-questions", json={"topic": "   ", "count": 3})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing topic"}
    assert model.prompts == []


def test_missing_and_non_string_topic_is_client_error(client, model):
    assert client.post("/api/generate-questions", json={}).status_code == 400
    assert client.post("/api/generate-questions", json={"topic": 5}).status_code == 400
    assert model.prompts == []


def test_malformed_body_is_client_error(client):
    r = client.post("/api/generate-questions", content=b"not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_non_json_output_is_bad_gateway_not_empty_list(client, model):
    model.responses.append("I would rather not.")
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 502
    assert "non-JSON" in r.json()["error"]


def test_non_array_output_is_bad_gateway(client, model):
    model.responses.append('{"quiz": []}')
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 502
    assert "not an array" in r.json()["error"]


def test_provider_failure_is_bad_gateway(client, model):
    model.responses.append(ProviderError("No content from Gemini"))
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 502
    assert r.json() == {"error": "No content from Gemini"}


def test_unexpected_failure_is_server_error(client, model):
    model.responses.append(RuntimeError("boom"))
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 500
    assert r.json() == {"error": "boom"}


def test_generate_feedback_success(client, model):
    model.responses.append("Great job on space facts.")
    r = client.post("/api/generate-feedback", json={"topic": "Space", "quizzes": [ITEM, dict(ITEM, chosenAnswer=None)]})
    assert r.status_code == 200
    assert r.json() == {"feedback": "Great job on space facts."}
    assert "not answered" in model.prompts[0]


def test_generate_feedback_requires_topic_and_items(client, model):
    assert client.post("/api/generate-feedback", json={"topic": "", "quizzes": [ITEM]}).status_code == 400
    assert client.post("/api/generate-feedback", json={"topic": "Space", "quizzes": []}).status_code == 400
    assert model.prompts == []


def test_generate_feedback_rejects_malformed_items(client, model):
    bad = dict(ITEM, options=["A", "B"])
    r = client.post("/api/generate-feedback", json={"topic": "Space", "quizzes": [bad]})
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid request")


def test_generate_feedback_upstream_failure(client, model):
    model.responses.append(ProviderError("No content from Gemini"))
    r = client.post("/api/generate-feedback", json={"topic": "Space", "quizzes": [ITEM]})
    assert r.status_code == 502


def test_huge_count_is_not_a_server_error(client, model):
    model.responses.append(questions_json(2))
    body = '{"topic": "Space", "count": 1' + "0" * 400 + "}"
    r = client.post("/api/generate-questions", content=body.encode(), headers={"content-type": "application/json"})
    assert r.status_code == 200
    assert len(r.json()["quizzes"]) == 2


def test_deeply_nested_output_is_bad_gateway(client, model):
    model.responses.append("[" * 100000 + "]" * 100000)
    r = client.post("/api/generate-questions", json={"topic": "Space"})
    assert r.status_code == 502
    assert "non-JSON" in r.json()["error"]
