"""Base class for webhook source parsers."""

from abc import ABC, abstractmethod
from typing import Mapping

from pydantic import BaseModel


class BaseSource(ABC):
    """Abstract base class for webhook source parsers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name identifier."""
        ...

    @abstractmethod
    def parse(self, body: str | bytes, headers: Mapping[str, str] | None = None) -> BaseModel:
        """Decode a raw webhook body into a typed payload.

        Raises ``PayloadDecodeError`` when the body does not match.
        """
        ...
