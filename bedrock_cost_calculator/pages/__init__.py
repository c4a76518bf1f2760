"""Pages module containing the calculator pages."""

from bedrock_cost_calculator.pages.embedding_calculator import embedding_calculator_page
from bedrock_cost_calculator.pages.model_management import model_management_page
from bedrock_cost_calculator.pages.token_calculator import token_calculator_page
from bedrock_cost_calculator.pages.token_counter import token_counter_page

__all__ = [
    "embedding_calculator_page",
    "model_management_page",
    "token_calculator_page",
    "token_counter_page",
]
