"""Market data models, order books, event models and stream transformers."""

__version__ = "0.1.0"
__all__ = ["book", "kinds", "levels", "model", "subscription", "transformer"]