from bedrock_cost_calculator.pages.model_management.page import model_management_page

__all__ = ["model_management_page"]
