"""Multi-provider LLM translation core."""

__version__ = "1.0.0"
