"""
Protocols (interfaces) for bwtpress components.

This module defines abstract contracts that implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

__all__ = [
    'TransformProtocol',
]


class TransformProtocol(ABC):
    """Protocol for one reversible pipeline stage."""

    @abstractmethod
    def encode(self, data: bytes, metadata: Dict[str, Any]) -> bytes:
        """
        Apply the forward transform.

        Args:
            data: Stage input
            metadata: Compression metadata; stages that need recovery
                      state (the BWT primary index) record it here

        Returns:
            Transformed bytes
        """
        pass

    @abstractmethod
    def decode(self, data: bytes, metadata: Mapping[str, Any]) -> bytes:
        """
        Apply the inverse transform.

        Args:
            data: Stage output from encode
            metadata: Compression metadata (read only)

        Returns:
            Stage input
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the stage name recorded in the stage list."""
        pass
