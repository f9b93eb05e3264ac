"""Parsers turning tutor model output into learning paths and assessment questions.

Model output is free text, so parsing is lenient: headings switch the current
learning-path section, and numbered blocks become questions. Lines that fit
no structure are kept as plain items rather than dropped.
"""

import re

from divetutor.models.curriculum import AssessmentQuestion, LearningPath

DEFAULT_EXPLANATION = "Professional explanation based on industry standards."

# Checked in order; the first section whose keyword appears in a heading wins
SECTION_KEYWORDS = [
    ("recommendations", ("recommendation", "learning")),
    ("next_steps", ("next step", "development")),
    ("resources", ("resource", "certification")),
]

_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
_QUESTION_START = re.compile(r"^\s*(?:\*\*)?(?:Q(?:uestion)?\s*)?\d+[.):]\s+", re.IGNORECASE | re.MULTILINE)
_OPTION = re.compile(r"^\s*\(?([A-Da-d])[).:]\s+(.*)$")
_ANSWER = re.compile(r"^\s*(?:\*\*)?(?:correct\s+)?answer(?:\*\*)?\s*:\s*(?:\*\*)?\s*(.*)$", re.IGNORECASE)
_EXPLANATION = re.compile(r"^\s*(?:\*\*)?explanation(?:\*\*)?\s*:\s*(?:\*\*)?\s*(.*)$", re.IGNORECASE)


def _heading_section(line: str) -> str | None:
    """Return the learning-path section a heading line opens, or None."""
    stripped = line.strip()
    is_heading = (
        stripped.startswith("#")
        or stripped.endswith(":")
        or (stripped.startswith("**") and stripped.endswith("**"))
    )
    if not is_heading or len(stripped) > 80:
        return None
    text = stripped.lower()
    for section, keywords in SECTION_KEYWORDS:
        if any(k in text for k in keywords):
            return section
    return None


def parse_learning_path(text: str) -> LearningPath:
    """Split model output into recommendations, next steps and resources.

    Items before the first heading count as recommendations.
    """
    sections: dict[str, list[str]] = {name: [] for name, _ in SECTION_KEYWORDS}
    current = "recommendations"
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        section = _heading_section(line)
        if section is not None:
            current = section
            continue
        if line.lstrip().startswith("#"):
            continue
        item = _BULLET.sub("", line).strip().strip("*").strip()
        if item:
            sections[current].append(item)

    return LearningPath(
        recommendations=tuple(sections["recommendations"]),
        next_steps=tuple(sections["next_steps"]),
        resources=tuple(sections["resources"]),
    )


def _parse_question_block(block: str, difficulty: str) -> AssessmentQuestion | None:
    lines = [ln for ln in block.splitlines() if ln.strip()]
    if not lines:
        return None

    question = lines[0].strip().strip("*").strip()
    if not question:
        return None
    labeled: dict[str, str] = {}
    loose: list[str] = []
    answer = ""
    explanation: list[str] = []
    in_explanation = False

    for line in lines[1:]:
        explanation_match = _EXPLANATION.match(line)
        answer_match = _ANSWER.match(line)
        option_match = _OPTION.match(line)
        if explanation_match:
            in_explanation = True
            if explanation_match.group(1).strip():
                explanation.append(explanation_match.group(1).strip())
        elif answer_match:
            answer = answer_match.group(1).strip().strip("*").strip()
            in_explanation = False
        elif in_explanation:
            explanation.append(line.strip())
        elif option_match:
            labeled[option_match.group(1).upper()] = option_match.group(2).strip()
        else:
            loose.append(_BULLET.sub("", line).strip())

    if labeled:
        options = tuple(labeled.values())
        letter = answer[:1].upper() if answer else ""
        if letter in labeled and (len(answer) == 1 or not answer[1:2].isalnum()):
            correct = labeled[letter]
        else:
            correct = answer or options[0]
    else:
        # Unlabeled output: the next four lines are the options
        options = tuple(loose[:4])
        explanation = explanation or loose[4:]
        correct = answer or (options[0] if options else "")

    return AssessmentQuestion(
        question=question,
        options=options,
        correct_answer=correct,
        explanation=" ".join(explanation).strip() or DEFAULT_EXPLANATION,
        difficulty=difficulty,
    )


def parse_assessment(text: str, difficulty: str, count: int | None = None) -> list[AssessmentQuestion]:
    """Split model output on numbered question markers into questions.

    Text before the first numbered marker is treated as preamble and skipped.
    """
    text = text or ""
    starts = list(_QUESTION_START.finditer(text))
    questions = []
    for i, match in enumerate(starts):
        end = starts[i + 1].start() if i + 1 < len(starts) else len(text)
        parsed = _parse_question_block(text[match.end():end], difficulty)
        if parsed is not None:
            questions.append(parsed)
    if count is not None:
        questions = questions[:count]
    return questions
