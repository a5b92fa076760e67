"""Batch selection and capture queue panel for region screenshots."""

__version__ = "0.3.0"
