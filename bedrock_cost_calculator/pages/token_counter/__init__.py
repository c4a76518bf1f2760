from bedrock_cost_calculator.pages.token_counter.page import token_counter_page

__all__ = ["token_counter_page"]
