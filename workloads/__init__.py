"""Loop-invariant workloads: a recompute and a hoisted variant per workload."""

from workloads.base import Variant, VariantPair, BaseWorkload
from workloads.catalog import (
    LenWorkload,
    SqrtWorkload,
    AttributeWorkload,
    ConstantExprWorkload,
    WORKLOADS,
    get_workload,
)
from workloads.generators import build_variants

__all__ = [
    "Variant",
    "VariantPair",
    "BaseWorkload",
    "LenWorkload",
    "SqrtWorkload",
    "AttributeWorkload",
    "ConstantExprWorkload",
    "WORKLOADS",
    "get_workload",
    "build_variants",
]
