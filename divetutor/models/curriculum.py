"""Learning path and assessment data models."""

from dataclasses import dataclass
from typing import Literal

Level = Literal["beginner", "intermediate", "advanced"]
LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class LearningPath:
    """Personalized study plan split into the three sections tutors produce."""

    recommendations: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()
    resources: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.recommendations or self.next_steps or self.resources)

    def to_dict(self) -> dict:
        return {
            "recommendations": list(self.recommendations),
            "nextSteps": list(self.next_steps),
            "resources": list(self.resources),
        }


@dataclass(frozen=True)
class AssessmentQuestion:
    """One multiple-choice question."""

    question: str
    options: tuple[str, ...]
    correct_answer: str
    explanation: str
    difficulty: str

    def __post_init__(self):
        if not self.question:
            raise ValueError("question must not be empty")
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "difficulty": self.difficulty,
        }
