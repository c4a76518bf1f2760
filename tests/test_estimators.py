import pytest

from bedrock_cost_calculator.pages.embedding_calculator.calculator import (
    calculate_embedding_cost,
    estimate_embedding_tokens,
)
from bedrock_cost_calculator.pages.token_counter.counter import count_tokens


def test_embedding_tokens_by_input_type():
    assert estimate_embedding_tokens("data-size", 2) == 322_000_000
    assert estimate_embedding_tokens("token-count", 1234) == 1234
    assert estimate_embedding_tokens("character-count", 400) == 100


def test_embedding_cost():
    estimate = calculate_embedding_cost("data-size", 1, 0.000024)

    assert estimate.tokens == 161_000_000
    assert estimate.total_cost == pytest.approx(3.864)


@pytest.mark.parametrize("value,price", [(0, 0.0001), (-1, 0.0001), (1, 0)])
def test_embedding_cost_rejects_non_positive_input(value, price):
    with pytest.raises(ValueError):
        calculate_embedding_cost("token-count", value, price)


def test_embedding_unknown_input_type():
    with pytest.raises(ValueError):
        estimate_embedding_tokens("pages", 10)


def test_simple_token_count():
    result = count_tokens("  Hello world. How are you?  ")

    assert result.characters == 25
    assert result.words == 5
    assert result.sentences == 2
    assert result.estimated_tokens == 7


def test_model_specific_token_count():
    result = count_tokens("a" * 42, tokenizer="llama")

    assert result.estimated_tokens == 11
    assert result.characters_per_token == 4.0
    assert result.method == "Meta Llama tokenization"


def test_token_count_validation():
    with pytest.raises(ValueError):
        count_tokens("   ")
    with pytest.raises(ValueError):
        count_tokens("text", tokenizer="unknown")
