import json
from typing import List
from ..models import QuizItem

NOT_ANSWERED = "not answered"

class PromptBuilder:
	def build_questions(self, *, topic: str, count: int) -> str:
		shape = [{"question": "Question text?", "options": ["optA", "optB", "optC", "optD"], "answer": 0}]
		return (
			f"You are a helpful assistant. Generate exactly {count} multiple-choice questions (MCQs) about the topic {json.dumps(topic, ensure_ascii=False)}.\n"
			"\n"
			"Return ONLY a valid JSON array (no explanatory text). The JSON must look like:\n"
			f"{json.dumps(shape, indent=2)}\n"
			"\n"
			"Requirements:\n"
			f"- Provide exactly {count} objects.\n"
			"- Each \"options\" must be an array of 4 strings.\n"
			"- \"answer\" must be an integer index 0..3 (the correct option).\n"
			"- Do NOT include any additional fields or text outside the JSON array."
		)

	def build_feedback(self, *, topic: str, items: List[QuizItem]) -> str:
		correct = sum(1 for q in items if q.is_correct)
		lines = [
			f"You are a supportive tutor. A learner just finished a multiple-choice quiz about the topic {json.dumps(topic, ensure_ascii=False)}.",
			f"Score: {correct} / {len(items)} correct.",
			"",
			"Answers:",
		]
		for i, q in enumerate(items, start=1):
			chosen = q.options[q.chosen_answer] if q.is_answered else NOT_ANSWERED
			lines.append(f"{i}. Question: {q.question}")
			lines.append(f"   Chosen answer: {chosen}")
			lines.append(f"   Correct answer: {q.options[q.answer]}")
			lines.append(f"   Result: {'correct' if q.is_correct else 'incorrect'}")
		lines.append("")
		lines.append(
			"Write short, encouraging feedback in plain prose: summarize how the learner did, "
			"point out the concepts behind the missed questions, and suggest what to review next. "
			"Do not repeat the questions verbatim and do not return JSON."
		)
		return "\n".join(lines)
