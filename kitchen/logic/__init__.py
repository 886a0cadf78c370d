"""Core business logic layer.

Subpackages:
- parsing: quantity parsing and ingredient name normalization
- shopping: categorization, ingredient aggregation and shopping list building
- prep: prep knowledge base, meal-prep analysis and prep scheduling
"""
__all__ = ["parsing", "shopping", "prep"]
