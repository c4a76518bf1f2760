from bedrock_cost_calculator.pages.embedding_calculator.page import embedding_calculator_page

__all__ = ["embedding_calculator_page"]
