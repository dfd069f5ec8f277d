"""FastAPI Initializr -- generates FastAPI starter projects as zip archives."""

__version__ = "0.1.0"
