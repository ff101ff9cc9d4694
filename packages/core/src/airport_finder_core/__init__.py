"""Core domain types and pure helpers shared by the Airport Finder apps."""

__version__ = "0.1.0"
