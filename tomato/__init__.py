"""Chess engine components: evaluations, search limits, transposition tables, timing and UCI messages."""

__version__ = "0.1.0"