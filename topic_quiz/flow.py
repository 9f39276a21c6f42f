import logging
from typing import List, Optional, Protocol
from .api_client import QuizApiError
from .models import QuizItem
from .state import QuizSession, Ticket

logger = logging.getLogger("topic_quiz")

class QuizApi(Protocol):
	async def fetch_questions(self, topic: str, count: Optional[int] = None) -> List[QuizItem]: ...

	async def fetch_feedback(self, topic: str, items: List[QuizItem]) -> str: ...

class QuizFlow:
	"""Drives a QuizSession through loading, answering and feedback.

	Only one call is expected to be outstanding at a time; callers keep their
	submit controls disabled while a coroutine of this class is pending.
	"""

	def __init__(self, session: QuizSession, api: QuizApi, count: Optional[int] = None) -> None:
		self.session = session
		self.api = api
		self.count = count

	async def start(self, topic: str) -> bool:
		ticket = self.session.submit_topic(topic)
		return await self._load(ticket)

	async def retry(self) -> bool:
		ticket = self.session.retry()
		return await self._load(ticket)

	async def _load(self, ticket: Ticket) -> bool:
		logger.debug({"event": "questions_requested", "topic": ticket.topic, "count": self.count})
		try:
			items = await self.api.fetch_questions(ticket.topic, self.count)
		except QuizApiError as exc:
			return self.session.load_failed(ticket, exc.message)
		return self.session.questions_loaded(ticket, items)

	def change_topic(self) -> None:
		self.session.change_topic()

	def select(self, option_index: int) -> bool:
		return self.session.select_answer(option_index)

	def prev(self) -> None:
		self.session.prev()

	def go_to(self, index: int) -> None:
		self.session.go_to(index)

	async def next(self) -> None:
		ticket = self.session.next()
		if ticket is not None:
			await self._request_feedback(ticket)

	async def _request_feedback(self, ticket: Ticket) -> bool:
		# snapshot so later edits to the session cannot leak into the request
		items = [q.model_copy() for q in self.session.items]
		logger.debug({"event": "feedback_requested", "topic": ticket.topic, "answered": self.session.answered_count})
		try:
			text = await self.api.fetch_feedback(ticket.topic, items)
		except QuizApiError as exc:
			return self.session.feedback_failed(ticket, exc.message)
		return self.session.feedback_received(ticket, text)

	def review(self) -> None:
		self.session.review()

	def restart(self) -> None:
		self.session.restart()
