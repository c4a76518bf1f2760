"""Heuristic token counting from raw text."""

import math
import re
from dataclasses import dataclass
from typing import Optional

SIMPLE_CHARACTERS_PER_TOKEN = 4

# Average characters per token observed for each tokenizer family
MODEL_TOKENIZERS = {
    "gpt": {"name": "OpenAI GPT", "ratio": 3.8, "method": "tiktoken-based"},
    "claude": {"name": "Anthropic Claude", "ratio": 4.2, "method": "Claude tokenizer"},
    "llama": {"name": "Meta Llama", "ratio": 4.0, "method": "SentencePiece"},
    "gemma": {"name": "Google Gemma", "ratio": 3.9, "method": "SentencePiece"},
}

SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class TokenCount:
    characters: int
    words: int
    sentences: int
    estimated_tokens: int
    characters_per_token: float
    method: str


def count_tokens(text: str, tokenizer: Optional[str] = None) -> TokenCount:
    """
    Estimate the number of tokens in a text.

    Args:
        text: Text to analyse; surrounding whitespace is ignored
        tokenizer: Key of ``MODEL_TOKENIZERS``, or None for the ~4 chars/token rule

    Returns:
        Text statistics and token estimate

    Raises:
        ValueError: If the text is empty or the tokenizer is unknown
    """
    text = text.strip()
    if not text:
        raise ValueError("Please enter some text to count tokens")

    if tokenizer is None:
        ratio = SIMPLE_CHARACTERS_PER_TOKEN
        method = "Simple character-based estimation"
    elif tokenizer in MODEL_TOKENIZERS:
        ratio = MODEL_TOKENIZERS[tokenizer]["ratio"]
        method = f"{MODEL_TOKENIZERS[tokenizer]['name']} tokenization"
    else:
        raise ValueError(f"Unknown tokenizer: '{tokenizer}'")

    characters = len(text)
    return TokenCount(
        characters=characters,
        words=len(text.split()),
        sentences=len([s for s in SENTENCE_SPLIT_PATTERN.split(text) if s.strip()]),
        estimated_tokens=math.ceil(characters / ratio),
        characters_per_token=ratio,
        method=method,
    )
