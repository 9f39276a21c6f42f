import pytest
from fastapi.testclient import TestClient

from topic_quiz.main import app, get_quiz_service
from topic_quiz.services.quiz_service import QuizService

from helpers import FakeModelClient


@pytest.fixture
def model():
    return FakeModelClient()


@pytest.fixture
def service(model):
    return QuizService(model)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_quiz_service] = lambda: service
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
