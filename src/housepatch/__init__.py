"""housepatch — partial updates for House aggregates."""

__version__ = "0.1.0"
