import json

from topic_quiz.errors import ProviderError
from topic_quiz.models import QuizItem


class FakeModelClient:
    """Returns queued responses in order; an exception in the queue is raised instead."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if not self.responses:
            raise ProviderError("No content from Gemini")
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def questions_json(n, start=1):
    return json.dumps([
        {"question": f"Q{i}", "options": ["A", "B", "C", "D"], "answer": i % 4}
        for i in range(start, start + n)
    ])


def make_item(answer=0, chosen=None, question="Q"):
    return QuizItem(question=question, options=["A", "B", "C", "D"], answer=answer, chosen_answer=chosen)


class FakeApi:
    def __init__(self, questions=None, feedback="Well done", fail_questions=None, fail_feedback=None):
        self.questions = questions if questions is not None else [make_item(answer=0), make_item(answer=1)]
        self.feedback = feedback
        self.fail_questions = fail_questions
        self.fail_feedback = fail_feedback
        self.question_calls = []
        self.feedback_calls = []

    async def fetch_questions(self, topic, count=None):
        self.question_calls.append((topic, count))
        if self.fail_questions:
            raise self.fail_questions
        return [q.model_copy() for q in self.questions]

    async def fetch_feedback(self, topic, items):
        self.feedback_calls.append((topic, items))
        if self.fail_feedback:
            raise self.fail_feedback
        return self.feedback
