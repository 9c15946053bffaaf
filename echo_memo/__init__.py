"""EchoMemo - Voice-assisted memo taking with incremental dictation formatting."""

__version__ = "0.1.0"

__all__ = ["__version__"]
