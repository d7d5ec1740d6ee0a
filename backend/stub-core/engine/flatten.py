# backend/stub-core/engine/flatten.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import config
from decl.graph import InheritanceGraph
from decl.model import FlattenedInterface, InterfaceDeclaration
from engine.eligibility import EligibilityFilter
from engine.resolver import InheritanceResolver

logger = logging.getLogger(__name__)


@dataclass
class TemplateInformation:
    """Everything the renderer needs for one generation run."""
    internal_namespace: str = ""
    class_list: List[FlattenedInterface] = field(default_factory=list)

    def to_debug_json(self) -> Dict[str, Any]:
        return {
            "internal_namespace": self.internal_namespace,
            "classes": [c.to_debug_json() for c in self.class_list],
        }


def normalize_internal_namespace(ns: Optional[str]) -> str:
    """'My.Lib.' / ' My.Lib ' -> 'My.Lib.'; blank -> ''."""
    if not ns or not ns.strip():
        return ""
    return f"{ns.strip().rstrip('.')}."


def flatten(declarations: Iterable[InterfaceDeclaration]) -> List[FlattenedInterface]:
    """
    Flatten every eligible interface of the declaration set.

    Each result lists own methods first (declared order), then inherited
    methods by base-reference order, recursively, specialized for this
    interface. Results are ordered by short interface name.
    """
    graph = InheritanceGraph(declarations)
    eligibility = EligibilityFilter(graph)
    resolver = InheritanceResolver(graph)

    # ordered by the short name; nested Outer.IApi sorts as IApi
    eligible = sorted(eligibility.eligible_interfaces(), key=lambda d: d.name.split(".")[-1])

    out: List[FlattenedInterface] = []
    for decl in eligible:
        out.append(FlattenedInterface(declaration=decl, merged_methods=resolver.merged_methods(decl)))

    logger.info(
        "Flattened %d of %d interfaces",
        len(out), len(graph.declarations()),
    )
    return out


def build_template_information(
    declarations: Iterable[InterfaceDeclaration],
    internal_namespace: Optional[str] = None,
) -> TemplateInformation:
    ns = config.INTERNAL_NAMESPACE if internal_namespace is None else internal_namespace
    return TemplateInformation(
        internal_namespace=normalize_internal_namespace(ns),
        class_list=flatten(declarations),
    )
