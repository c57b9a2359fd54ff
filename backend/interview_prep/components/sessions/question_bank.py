"""Built-in question bank and question list merging."""

from __future__ import annotations

from typing import List

from .schemas import InterviewQuestion

MIXED_SESSION_MAX_QUESTIONS = 5
TYPED_SESSION_MAX_QUESTIONS = 8

DEFAULT_QUESTIONS: List[InterviewQuestion] = [
    InterviewQuestion(
        id="1",
        type="behavioral",
        difficulty="medium",
        question=(
            "Tell me about a time when you had to work with a difficult team member. "
            "How did you handle the situation?"
        ),
        follow_up=[
            "What would you do differently?",
            "How did this experience change your approach to teamwork?",
        ],
        time_limit=180,
    ),
    InterviewQuestion(
        id="2",
        type="technical",
        difficulty="medium",
        question="Explain the difference between REST and GraphQL APIs. When would you choose one over the other?",
        follow_up=["Can you give an example of when GraphQL would be preferred?"],
        time_limit=240,
    ),
    InterviewQuestion(
        id="3",
        type="situational",
        difficulty="hard",
        question=(
            "You're leading a project that's behind schedule and over budget. The client is demanding "
            "delivery by the original deadline. How do you handle this situation?"
        ),
        follow_up=[
            "How would you communicate this to stakeholders?",
            "What steps would you take to prevent this in future projects?",
        ],
        time_limit=300,
    ),
    InterviewQuestion(
        id="4",
        type="behavioral",
        difficulty="easy",
        question="Describe a project you're particularly proud of. What made it successful?",
        follow_up=["What challenges did you face?", "What did you learn from this project?"],
        time_limit=180,
    ),
    InterviewQuestion(
        id="5",
        type="technical",
        difficulty="hard",
        question=(
            "How would you design a system to handle 1 million concurrent users? "
            "Walk me through your architecture decisions."
        ),
        follow_up=["How would you handle database scaling?", "What about caching strategies?"],
        time_limit=360,
    ),
]


def _bank_copies(questions: List[InterviewQuestion], limit: int) -> List[InterviewQuestion]:
    return [q.model_copy(deep=True, update={"origin": "default"}) for q in questions[:limit]]


def select_questions(interview_type: str, difficulty: str) -> List[InterviewQuestion]:
    if interview_type == "mixed":
        matching = [q for q in DEFAULT_QUESTIONS if q.difficulty == difficulty]
        return _bank_copies(matching, MIXED_SESSION_MAX_QUESTIONS)
    matching = [q for q in DEFAULT_QUESTIONS if q.type == interview_type and q.difficulty == difficulty]
    return _bank_copies(matching, TYPED_SESSION_MAX_QUESTIONS)


def merge_question_collections(
    primary: List[InterviewQuestion],
    secondary: List[InterviewQuestion],
) -> List[InterviewQuestion]:
    """``primary`` then ``secondary``, keeping the first question seen for each id."""
    seen: set[str] = set()
    merged: List[InterviewQuestion] = []
    for question in [*primary, *secondary]:
        if question.id in seen:
            continue
        seen.add(question.id)
        merged.append(question)
    return merged
