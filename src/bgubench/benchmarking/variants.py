"""Variant registry for interchangeable operator implementations.

Each benchmarked implementation (hand-scheduled, auto-scheduled,
gradient-autoscheduled) computes the same result over the same shared
buffers; only its schedule differs. A ``Variant`` binds one implementation
to those buffers as a zero-argument unit of work plus a completion barrier,
and a ``VariantRegistry`` keeps them in registration order.

Operator callables are resolved at runtime from ``"module:attribute"``
targets. A variant without a target is simply absent from the registry;
the registry may be empty.
"""

from __future__ import annotations

import functools
import importlib
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from bgubench.core.buffer import ImageBuffer
from bgubench.effects.burst import BurstParameters
from bgubench.typing import BurstOperator, SyncFn, TransferOperator, WorkFn

logger = logging.getLogger(__name__)


class VariantId(str, Enum):
    """Closed set of operator implementations the harness knows about."""

    MANUAL = "manual"
    AUTO_SCHEDULED = "auto_scheduled"
    GRADIENT_AUTO_SCHEDULED = "gradient_auto_scheduled"

    @property
    def label(self) -> str:
        """Human-readable suffix used in report names."""
        return _LABELS[self]


_LABELS = {
    VariantId.MANUAL: "Manual",
    VariantId.AUTO_SCHEDULED: "Auto-scheduled",
    VariantId.GRADIENT_AUTO_SCHEDULED: "Gradient auto-scheduled",
}


def _no_sync() -> None:
    pass


@dataclass(frozen=True)
class Variant:
    """One named unit of work to benchmark.

    Attributes:
        name: Report label.
        work: Issues the operator invocation over the bound buffers.
        sync: Completion barrier, always called after ``work``. Synchronous
            backends use the default no-op.
        variant_id: Implementation this variant wraps, if it is one of the
            known ones.
    """

    name: str
    work: WorkFn
    sync: SyncFn = _no_sync
    variant_id: VariantId | None = None

    def __call__(self) -> None:
        self.work()
        self.sync()


class VariantRegistry:
    """Ordered collection of variants with unique names."""

    def __init__(self, variants: list[Variant] | None = None):
        self._variants: list[Variant] = []
        for variant in variants or []:
            self.register(variant)

    def register(self, variant: Variant) -> Variant:
        """Append ``variant``.

        Raises:
            ValueError: If a variant with the same name is already registered.
        """
        if variant.name in self.names():
            raise ValueError(f"Variant '{variant.name}' is already registered")
        self._variants.append(variant)
        logger.debug("Registered variant %s", variant.name)
        return variant

    def add(
        self,
        name: str,
        work: WorkFn,
        sync: SyncFn | None = None,
        variant_id: VariantId | None = None,
    ) -> Variant:
        """Build and register a variant from its parts."""
        return self.register(
            Variant(name=name, work=work, sync=sync or _no_sync, variant_id=variant_id)
        )

    def names(self) -> list[str]:
        return [v.name for v in self._variants]

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)


def load_operator(target: str) -> Callable[..., Any]:
    """Import the callable named by a ``"package.module:attribute"`` target.

    Raises:
        ValueError: If the target is malformed or does not name a callable.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Operator target must look like 'module:attribute', got '{target}'")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)

    if not callable(obj):
        raise ValueError(f"Operator target '{target}' is not callable")
    return obj


def resolve_operators(targets: Mapping[str, str]) -> dict[VariantId, Callable[..., Any]]:
    """Resolve configured targets into operators, in ``VariantId`` order.

    Args:
        targets: Mapping from variant id value (e.g. ``"manual"``) to import
            target. Missing ids are skipped.

    Raises:
        ValueError: If a key is not a known variant id.
    """
    known = {v.value for v in VariantId}
    unknown = sorted(set(targets) - known)
    if unknown:
        raise ValueError(f"Unknown variant id(s) {unknown}; expected some of {sorted(known)}")

    operators: dict[VariantId, Callable[..., Any]] = {}
    for variant_id in VariantId:
        target = targets.get(variant_id.value)
        if target:
            operators[variant_id] = load_operator(target)
            logger.info("Resolved %s operator from %s", variant_id.value, target)
    return operators


def build_filter_registry(
    operators: Mapping[VariantId, TransferOperator],
    r_sigma: float,
    s_sigma: int,
    low_res_in: ImageBuffer,
    low_res_out: ImageBuffer,
    high_res_in: ImageBuffer,
    high_res_out: ImageBuffer,
    prefix: str = "bgu",
) -> VariantRegistry:
    """Bind guided-upsampling operators to the shared harness buffers.

    Every variant writes ``high_res_out`` and syncs on it.
    """
    registry = VariantRegistry()
    for variant_id in VariantId:
        if variant_id not in operators:
            continue
        work = functools.partial(
            operators[variant_id],
            r_sigma,
            s_sigma,
            low_res_in,
            low_res_out,
            high_res_in,
            high_res_out,
        )
        registry.add(
            f"{prefix} {variant_id.label}",
            work,
            sync=high_res_out.device_sync,
            variant_id=variant_id,
        )
    return registry


def build_burst_registry(
    operators: Mapping[VariantId, BurstOperator],
    inputs: ImageBuffer,
    params: BurstParameters,
    output: ImageBuffer,
    prefix: str = "burst_camera_pipe",
) -> VariantRegistry:
    """Bind burst camera pipeline operators to the shared harness buffers."""
    registry = VariantRegistry()
    for variant_id in VariantId:
        if variant_id not in operators:
            continue
        work = functools.partial(operators[variant_id], inputs, *params.as_args(), output)
        registry.add(
            f"{prefix} {variant_id.label}",
            work,
            sync=output.device_sync,
            variant_id=variant_id,
        )
    return registry
