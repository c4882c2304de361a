"""MindWell: mood journaling, recommendations and support chat backed by Groq."""

__version__ = "1.0.0"
