"""A base class giving each subclass one lazily created shared instance."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

__all__ = ["Singleton"]

T = TypeVar("T", bound="Singleton")


class Singleton:
    """Subclass this to get :meth:`instance` and :meth:`destroy`.

    Each subclass has its own instance, created on first request.
    """

    _instances: ClassVar[dict[type, Any]] = {}

    @classmethod
    def instance(cls: type[T]) -> T:
        """Return the unique instance of this class, creating it if needed."""
        if cls is Singleton:
            raise TypeError("Singleton must be subclassed")
        try:
            return Singleton._instances[cls]
        except KeyError:
            created = cls()
            Singleton._instances[cls] = created
            return created

    @classmethod
    def destroy(cls) -> None:
        """Drop the unique instance; the next request creates a fresh one."""
        Singleton._instances.pop(cls, None)