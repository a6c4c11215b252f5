"""Russian morphology dictionary tools: records, binary tables, interchange compiler and helpers."""

__version__ = "0.1.0"
__all__ = ["__version__"]