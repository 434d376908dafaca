"""Variant pair builder."""

from typing import Optional
from workloads.base import VariantPair
from workloads.catalog import get_workload


def build_variants(
    workload: str,
    size: int,
    seed: Optional[int] = None,
) -> VariantPair:
    return get_workload(workload).build(size=size, seed=seed)
