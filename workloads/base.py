"""Base types for loop-invariant workloads."""

from dataclasses import dataclass
from typing import Any, Callable, Optional
from abc import ABC, abstractmethod


@dataclass(frozen=True)
class Variant:
    label: str
    computation: Callable[[], Any]
    description: str = ""


@dataclass(frozen=True)
class VariantPair:
    """Recompute (A) and hoisted (B) forms of the same loop, built over the same data."""
    workload: str
    recompute: Variant
    hoisted: Variant

    def __iter__(self):
        yield self.recompute
        yield self.hoisted


class BaseWorkload(ABC):
    name: str = ""
    description: str = ""

    @abstractmethod
    def build(self, size: int, seed: Optional[int] = None) -> VariantPair:
        """Prepare input data once and return both variants over it."""
        pass
