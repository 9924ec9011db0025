"""Keyword check for questions that ask about the future."""

from typing import Optional

FORECASTING_KEYWORDS = (
    'forecast', 'predict', 'future', 'next month', 'next quarter', 'next year',
    'trend', 'projection', 'will be', 'going to', 'expect', 'likely',
    'forecasting', 'prediction', 'upcoming', 'forthcoming',
)


def is_forecasting_intent(question: Optional[str]) -> bool:
    """
    True when the question contains any forecasting keyword (case-insensitive).

    Substring matching is deliberately loose: "trends" and "expected" match too.

    Example:
        >>> is_forecasting_intent("What will sales be next quarter?")
        True
    """
    if not question:
        return False

    lowered = question.lower()
    return any(keyword in lowered for keyword in FORECASTING_KEYWORDS)
