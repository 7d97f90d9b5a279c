"""TAP DataSage: LLM-based data assistant for test data and code."""

__version__ = "1.0.0"
