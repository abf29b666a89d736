"""Schema-driven form engine for the legal document builder."""

__version__ = "0.1.0"
