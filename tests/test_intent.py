import pytest

from dataset_reducer import is_forecasting_intent


@pytest.mark.parametrize("question", [
    "What will sales be next quarter?",
    "Can you forecast my revenue?",
    "Predict future sales",
    "What is the TREND in my sales?",
    "How many orders do we expect in the upcoming season?",
])
def test_forecasting_questions(question):
    assert is_forecasting_intent(question)


@pytest.mark.parametrize("question", [
    "Show me total sales",
    "What are my current sales?",
    "Analyze my data",
    "",
    None,
])
def test_other_questions(question):
    assert not is_forecasting_intent(question)
