"""sitepkg Core Models Package - Domain models for the option layer."""

from .option import Option

__all__ = [
    "Option",
]
