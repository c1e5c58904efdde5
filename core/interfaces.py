"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Romanizer(ABC):
    """Abstract base class for native-script to Latin transliteration."""

    @abstractmethod
    def romanize(self, word: str) -> list[str]:
        """Romanize a word. Returns one form per supported scheme, canonical first."""
        pass


class PersistenceAdapter(ABC):
    """Abstract base class for key/value state storage."""

    @abstractmethod
    def get(self, key: str, user_id: str = "default"):
        """Get the value stored under key. Returns None if not found."""
        pass

    @abstractmethod
    def set(self, key: str, value, user_id: str = "default") -> None:
        """Store a JSON-serializable value under key, replacing any previous one."""
        pass

    @abstractmethod
    def remove(self, key: str, user_id: str = "default") -> None:
        """Remove key. Removing a missing key is a no-op."""
        pass
