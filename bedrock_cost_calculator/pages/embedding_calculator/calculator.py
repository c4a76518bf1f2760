"""Embedding cost estimation."""

from dataclasses import dataclass
from typing import Literal

InputType = Literal["data-size", "token-count", "character-count"]

TOKENS_PER_GB = 161_000_000
CHARACTERS_PER_TOKEN = 4

# Prices in USD per 1K tokens
EMBEDDING_MODELS = {
    "titan-v1": {"name": "Amazon Titan Text Embedding V1", "price": 0.0001},
    "titan-v2": {"name": "Amazon Titan Text Embedding V2", "price": 0.000024},
    "cohere-embed": {"name": "Cohere Embed English", "price": 0.0001},
    "cohere-embed-multilingual": {"name": "Cohere Embed Multilingual", "price": 0.0001},
}

INPUT_TYPE_LABELS = {
    "data-size": "Data Size (GB)",
    "token-count": "Token Count",
    "character-count": "Character Count",
}


@dataclass(frozen=True)
class EmbeddingEstimate:
    tokens: float
    total_cost: float


def estimate_embedding_tokens(input_type: InputType, value: float) -> float:
    """
    Convert an input quantity to a token count.

    Args:
        input_type: "data-size" (GB), "token-count" or "character-count"
        value: Quantity in the unit of ``input_type``

    Returns:
        Estimated number of tokens
    """
    if input_type == "data-size":
        return value * TOKENS_PER_GB
    elif input_type == "token-count":
        return value
    elif input_type == "character-count":
        return value / CHARACTERS_PER_TOKEN
    else:
        raise ValueError(
            f"Unknown input type: '{input_type}'. "
            f"Valid types are: {', '.join(INPUT_TYPE_LABELS)}"
        )


def calculate_embedding_cost(
    input_type: InputType,
    value: float,
    price_per_k_tokens: float
) -> EmbeddingEstimate:
    """
    Estimate the cost of embedding a corpus.

    Raises:
        ValueError: If the value or price is not positive
    """
    if not value or value <= 0:
        raise ValueError("Please enter a valid value")
    if not price_per_k_tokens or price_per_k_tokens <= 0:
        raise ValueError("Please enter a valid model price")

    tokens = estimate_embedding_tokens(input_type, value)
    return EmbeddingEstimate(tokens=tokens, total_cost=(price_per_k_tokens / 1000) * tokens)
