"""Pure pursuit steering with a PI correction for path tracking."""

__version__ = "0.1.0"
__all__ = ["controller", "geometry", "node"]