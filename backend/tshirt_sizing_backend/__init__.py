"""T-shirt sizing backend: shared estimation boards with realtime fan-out."""

__version__ = "1.0.0"
