"""Workload catalog: len, sqrt, attribute, constant_expr."""

import math
import random
from typing import Optional

from workloads.base import BaseWorkload, Variant, VariantPair


def _make_data(size: int, seed: Optional[int]) -> list[int]:
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    rng = random.Random(seed)
    return [rng.randint(0, 1000) for _ in range(size)]


def _pair(name: str, recompute, hoisted, invariant: str) -> VariantPair:
    return VariantPair(
        workload=name,
        recompute=Variant(label="recompute", computation=recompute, description=f"{invariant} evaluated every iteration"),
        hoisted=Variant(label="hoisted", computation=hoisted, description=f"{invariant} evaluated once before the loop"),
    )


class LenWorkload(BaseWorkload):
    name = "len"
    description = "Scale every element by len(data)."

    def build(self, size: int, seed: Optional[int] = None) -> VariantPair:
        data = _make_data(size, seed)

        def recompute():
            total = 0
            for x in data:
                total += x * len(data)
            return total

        def hoisted():
            n = len(data)
            total = 0
            for x in data:
                total += x * n
            return total

        return _pair(self.name, recompute, hoisted, "len(data)")


class SqrtWorkload(BaseWorkload):
    name = "sqrt"
    description = "Divide every element by math.sqrt(scale)."

    def __init__(self, scale: float = 2.0):
        self.scale = scale

    def build(self, size: int, seed: Optional[int] = None) -> VariantPair:
        data = _make_data(size, seed)
        scale = self.scale

        def recompute():
            total = 0.0
            for x in data:
                total += x / math.sqrt(scale)
            return total

        def hoisted():
            root = math.sqrt(scale)
            total = 0.0
            for x in data:
                total += x / root
            return total

        return _pair(self.name, recompute, hoisted, "math.sqrt(scale)")


class AttributeWorkload(BaseWorkload):
    name = "attribute"
    description = "Append every element through a bound method looked up in the loop."

    def build(self, size: int, seed: Optional[int] = None) -> VariantPair:
        data = _make_data(size, seed)

        def recompute():
            out = []
            for x in data:
                out.append(x)
            return out

        def hoisted():
            out = []
            append = out.append
            for x in data:
                append(x)
            return out

        return _pair(self.name, recompute, hoisted, "out.append")


class ConstantExprWorkload(BaseWorkload):
    name = "constant_expr"
    description = "Multiply every element by (factor ** 2 + 1)."

    def __init__(self, factor: int = 7):
        self.factor = factor

    def build(self, size: int, seed: Optional[int] = None) -> VariantPair:
        data = _make_data(size, seed)
        factor = self.factor

        def recompute():
            total = 0
            for x in data:
                total += x * (factor ** 2 + 1)
            return total

        def hoisted():
            k = factor ** 2 + 1
            total = 0
            for x in data:
                total += x * k
            return total

        return _pair(self.name, recompute, hoisted, "factor ** 2 + 1")


WORKLOADS: dict[str, BaseWorkload] = {
    w.name: w
    for w in (LenWorkload(), SqrtWorkload(), AttributeWorkload(), ConstantExprWorkload())
}


def get_workload(name: str) -> BaseWorkload:
    try:
        return WORKLOADS[name]
    except KeyError:
        known = ", ".join(sorted(WORKLOADS))
        raise ValueError(f"unknown workload {name!r} (known: {known})") from None
