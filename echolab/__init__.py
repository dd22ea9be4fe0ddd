"""EchoLab - English listening, speaking and review companion."""

__version__ = "0.1.0"
