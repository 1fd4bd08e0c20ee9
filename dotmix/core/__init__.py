"""Core registry, settings and runtime context."""
