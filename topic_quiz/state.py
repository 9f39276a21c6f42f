import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .errors import SessionStateError, ValidationError
from .models import OPTION_COUNT, QuizItem

logger = logging.getLogger("topic_quiz")

class Phase(str, Enum):
	IDLE = "idle"
	LOADING = "loading"
	LOAD_ERROR = "load_error"
	IN_PROGRESS = "in_progress"
	COMPLETING = "completing"
	COMPLETED = "completed"

@dataclass(frozen=True)
class Ticket:
	"""Identifies the session an outstanding generation call was started for."""
	topic: str
	generation: int

class QuizSession:
	"""One quiz attempt: the topic, its questions, and where the user is.

	Results of asynchronous calls are applied through a Ticket taken when the call
	started; a result whose ticket no longer matches the session is discarded.
	"""

	def __init__(self) -> None:
		self.phase = Phase.IDLE
		self.topic = ""
		self.items: List[QuizItem] = []
		self.index = 0
		self.load_error: Optional[str] = None
		self.feedback: Optional[str] = None
		self.feedback_error: Optional[str] = None
		self.generation = 0

	@property
	def total(self) -> int:
		return len(self.items)

	@property
	def answered_count(self) -> int:
		return sum(1 for q in self.items if q.is_answered)

	@property
	def correct_count(self) -> int:
		return sum(1 for q in self.items if q.is_correct)

	@property
	def current(self) -> Optional[QuizItem]:
		if not self.items:
			return None
		return self.items[self.index]

	@property
	def is_last(self) -> bool:
		return self.index == self.total - 1

	def _require(self, *phases: Phase) -> None:
		if self.phase not in phases:
			allowed = ", ".join(p.value for p in phases)
			raise SessionStateError(f"action not allowed in phase {self.phase.value} (expected {allowed})")

	def _ticket(self) -> Ticket:
		return Ticket(topic=self.topic, generation=self.generation)

	def is_current(self, ticket: Ticket) -> bool:
		return ticket.topic == self.topic and ticket.generation == self.generation

	def _accept(self, ticket: Ticket, expected: Phase, event: str) -> bool:
		if not self.is_current(ticket) or self.phase != expected:
			logger.debug({"event": event, "ticket_topic": ticket.topic, "current_topic": self.topic, "phase": self.phase.value})
			return False
		return True

	def submit_topic(self, topic: str) -> Ticket:
		self._require(Phase.IDLE)
		topic = (topic or "").strip()
		if not topic:
			raise ValidationError("Missing topic")
		self.topic = topic
		self.generation += 1
		self.phase = Phase.LOADING
		return self._ticket()

	def questions_loaded(self, ticket: Ticket, items: List[QuizItem]) -> bool:
		if not self._accept(ticket, Phase.LOADING, "stale_questions_discarded"):
			return False
		if not items:
			return self.load_failed(ticket, "No questions returned")
		self.items = list(items)
		self.index = 0
		self.load_error = None
		self.phase = Phase.IN_PROGRESS
		return True

	def load_failed(self, ticket: Ticket, message: str) -> bool:
		if not self._accept(ticket, Phase.LOADING, "stale_load_error_discarded"):
			return False
		self.items = []
		self.load_error = message
		self.phase = Phase.LOAD_ERROR
		return True

	def retry(self) -> Ticket:
		self._require(Phase.LOAD_ERROR)
		self.load_error = None
		self.generation += 1
		self.phase = Phase.LOADING
		return self._ticket()

	def change_topic(self) -> None:
		self._require(Phase.LOAD_ERROR)
		self.restart()

	def select_answer(self, option_index: int) -> bool:
		"""Record a choice for the current question; ignored outside an attempt."""
		if self.phase != Phase.IN_PROGRESS:
			return False
		if not 0 <= option_index < OPTION_COUNT:
			raise ValueError(f"option index out of range: {option_index}")
		self.items[self.index].chosen_answer = option_index
		return True

	def prev(self) -> None:
		self._require(Phase.IN_PROGRESS, Phase.COMPLETED)
		self.index = max(0, self.index - 1)

	def next(self) -> Optional[Ticket]:
		"""Advance; finishing the last question starts completion and returns its ticket."""
		self._require(Phase.IN_PROGRESS, Phase.COMPLETED)
		if self.phase == Phase.IN_PROGRESS and self.is_last:
			self.feedback = None
			self.feedback_error = None
			self.phase = Phase.COMPLETING
			return self._ticket()
		self.index = min(self.total - 1, self.index + 1)
		return None

	def go_to(self, index: int) -> None:
		self._require(Phase.IN_PROGRESS)
		if not 0 <= index < self.total:
			raise IndexError(f"question index out of range: {index}")
		self.index = index

	def feedback_received(self, ticket: Ticket, text: str) -> bool:
		if not self._accept(ticket, Phase.COMPLETING, "stale_feedback_discarded"):
			return False
		self.feedback = text
		self.feedback_error = None
		self.phase = Phase.COMPLETED
		return True

	def feedback_failed(self, ticket: Ticket, message: str) -> bool:
		if not self._accept(ticket, Phase.COMPLETING, "stale_feedback_error_discarded"):
			return False
		self.feedback = None
		self.feedback_error = message
		self.phase = Phase.COMPLETED
		return True

	def review(self) -> None:
		self._require(Phase.COMPLETED)
		self.index = 0

	def restart(self) -> None:
		self.topic = ""
		self.items = []
		self.index = 0
		self.load_error = None
		self.feedback = None
		self.feedback_error = None
		self.generation += 1
		self.phase = Phase.IDLE
