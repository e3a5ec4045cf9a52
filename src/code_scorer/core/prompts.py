"""Prompt construction for code evaluation."""

from __future__ import annotations

EVALUATION_CRITERIA = [
    "Adherence to modern best practices",
    "Code efficiency and performance",
    "Readability and maintainability",
    "Correctness and lack of bugs",
]

PROMPT_TEMPLATE = """You are an expert software reviewer. Your task is to evaluate the following code for the following criteria:
{criteria}

Rate the code on a scale of 0 to 100, where 100 represents perfect code across all criteria.

Only return the score as a number (e.g., 85). Do not provide any explanations, comments, or additional content beyond the score.

Code:
{code}

Return only the score as a number out of 100.
"""


def _criteria_block() -> str:
    return "\n".join(f"{i}. {criterion}" for i, criterion in enumerate(EVALUATION_CRITERIA, start=1))


def build_evaluation_prompt(code: str) -> str:
    """Embed the code verbatim into the fixed evaluation instructions.

    Braces in the code are never interpreted as format fields.
    """
    head, tail = PROMPT_TEMPLATE.split("{code}")
    return head.format(criteria=_criteria_block()) + code + tail
