"""Terminal front end for the quiz backend.

Usage:
    topic-quiz --url http://127.0.0.1:8000 --count 5
"""

import argparse
import asyncio
from typing import Callable, List

from .api_client import QuizApiClient
from .config import settings
from .flow import QuizFlow
from .state import Phase, QuizSession

LETTERS = "ABCD"

HELP_IN_PROGRESS = "[1-4] answer  [n]ext  [p]rev  [g N] go to question  [r]estart  [q]uit"
HELP_LOAD_ERROR = "[t] retry  [c] change topic  [q]uit"
HELP_COMPLETED = "[v] review  [n]ext  [p]rev  [r]estart  [q]uit"


def render_question(session: QuizSession) -> str:
    q = session.current
    lines = [
        f"Topic: {session.topic}",
        f"Progress: {session.index + 1} / {session.total} - Answered: {session.answered_count}",
        "",
        f"{session.index + 1}. {q.question}",
    ]
    read_only = session.phase == Phase.COMPLETED
    for i, opt in enumerate(q.options):
        marks = []
        if q.chosen_answer == i:
            marks.append("selected")
        if read_only and q.answer == i:
            marks.append("correct")
        suffix = f"  ({', '.join(marks)})" if marks else ""
        lines.append(f"  {LETTERS[i]}) {opt}{suffix}")
    return "\n".join(lines)


def render_results(session: QuizSession) -> str:
    lines = [
        "Quiz complete",
        f"You answered {session.answered_count} out of {session.total} questions.",
        f"Score: {session.correct_count} / {session.total}",
        "",
        "Feedback:",
    ]
    if session.feedback_error:
        lines.append(f"Failed to get feedback: {session.feedback_error}")
    elif session.feedback:
        lines.append(session.feedback)
    else:
        lines.append("No feedback yet.")
    lines.append("")
    for i, q in enumerate(session.items, start=1):
        chosen = q.options[q.chosen_answer] if q.is_answered else "Not answered"
        lines.append(f"{i}. {q.question}")
        lines.append(f"   Your answer: {chosen}")
        lines.append(f"   Correct answer: {q.options[q.answer]}")
        lines.append(f"   {'Correct' if q.is_correct else 'Incorrect'}")
    return "\n".join(lines)


async def run(flow: QuizFlow, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    session = flow.session
    while True:
        if session.phase == Phase.IDLE:
            topic = read("Quiz topic (blank to quit): ").strip()
            if not topic:
                return
            write(f'Loading questions for "{topic}"...')
            await flow.start(topic)
            continue

        if session.phase == Phase.LOAD_ERROR:
            write(f"Failed to load questions: {session.load_error}")
            cmd = read(f"{HELP_LOAD_ERROR}> ").strip().lower()
            if cmd == "t":
                await flow.retry()
            elif cmd == "c":
                flow.change_topic()
            elif cmd == "q":
                return
            continue

        if session.phase == Phase.IN_PROGRESS:
            write(render_question(session))
            cmd = read(f"{HELP_IN_PROGRESS}> ").strip().lower()
            if cmd in ("1", "2", "3", "4"):
                flow.select(int(cmd) - 1)
            elif cmd == "n":
                if session.is_last:
                    write("Generating feedback...")
                await flow.next()
                if session.phase == Phase.COMPLETED:
                    write(render_results(session))
            elif cmd == "p":
                flow.prev()
            elif cmd.startswith("g"):
                _go_to(flow, cmd[1:], write)
            elif cmd == "r":
                flow.restart()
            elif cmd == "q":
                return
            continue

        if session.phase == Phase.COMPLETED:
            cmd = read(f"{HELP_COMPLETED}> ").strip().lower()
            if cmd == "v":
                flow.review()
                write(render_question(session))
            elif cmd == "n":
                await flow.next()
                write(render_question(session))
            elif cmd == "p":
                flow.prev()
                write(render_question(session))
            elif cmd == "r":
                flow.restart()
            elif cmd == "q":
                return
            continue

        # loading and completing are only observed while a call is awaited
        return


def _go_to(flow: QuizFlow, arg: str, write: Callable[[str], None]) -> None:
    try:
        flow.go_to(int(arg.strip()) - 1)
    except (ValueError, IndexError):
        write(f"No such question: {arg.strip()}")


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Answer AI-generated multiple-choice quizzes in the terminal.")
    parser.add_argument("--url", default=settings.api_url, help="Base URL of the quiz server")
    parser.add_argument("--count", type=int, default=settings.default_question_count, help="Questions per quiz")
    parser.add_argument("--timeout", type=float, default=settings.api_timeout, help="Request timeout in seconds")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    flow = QuizFlow(QuizSession(), QuizApiClient(args.url, timeout=args.timeout), count=args.count)
    try:
        asyncio.run(run(flow))
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
