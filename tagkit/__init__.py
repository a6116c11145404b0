"""PCG random generators, point conditioning and small runtime utilities."""

__version__ = "0.1.0"

__all__ = [
    "bits",
    "conditioner",
    "engine",
    "extended",
    "extras",
    "logtime",
    "output",
    "singleton",
    "talk",
]