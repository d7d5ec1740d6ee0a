from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from decl.graph import InheritanceGraph
from decl.model import BaseReference, InterfaceDeclaration, MethodDeclaration
from engine.errors import CyclicInheritanceError
from engine.specializer import specialize_method, substitution_map

logger = logging.getLogger(__name__)

Key = Tuple[str, int]


class InheritanceResolver:
    """
    Builds the merged (own + inherited, specialized) method list of an interface.

    Bases are resolved before being merged into a descendant, so for
    C : B<string>, B<U> : A<U> the methods of A are already rewritten to `U`
    inside B's list before the C -> B edge rewrites `U` to `string`.

    Results are cached per (name, arity); the declaration set must not change
    during the resolver's lifetime.
    """

    def __init__(self, graph: InheritanceGraph) -> None:
        self.graph = graph
        self._cache: Dict[Key, Tuple[MethodDeclaration, ...]] = {}

    def merged_methods(self, decl: InterfaceDeclaration) -> List[MethodDeclaration]:
        return list(self._resolve(decl, ()))

    def _resolve(self, decl: InterfaceDeclaration, path: Tuple[Key, ...]) -> Tuple[MethodDeclaration, ...]:
        key = decl.lookup_key
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        if key in path:
            raise CyclicInheritanceError(path[path.index(key):] + (key,))

        merged: List[MethodDeclaration] = list(decl.own_methods)
        seen: Set[Tuple[str, int, str]] = {m.dedup_key for m in merged}
        shadowed: Set[Tuple[int, str]] = {m.shadow_key for m in merged}

        for ref in decl.base_references:
            base = self.graph.resolve(ref)
            if base is None:
                continue
            base_methods = self._resolve(base, path + (key,))
            carried = self._collect(base_methods, seen, shadowed)
            merged.extend(self._specialize(carried, base, ref))

        result = tuple(merged)
        self._cache[key] = result
        logger.debug(
            "Resolved %s: %d own, %d inherited",
            decl.name, len(decl.own_methods), len(result) - len(decl.own_methods),
        )
        return result

    # ---------------- Edge passes ----------------

    def _collect(
        self,
        base_methods: Tuple[MethodDeclaration, ...],
        seen: Set[Tuple[str, int, str]],
        shadowed: Set[Tuple[int, str]],
    ) -> List[MethodDeclaration]:
        """
        Keep methods whose key is not taken yet; earlier entries win.
        Own methods also hide inherited ones of the same name and generic arity.
        """
        carried: List[MethodDeclaration] = []
        for m in base_methods:
            if m.dedup_key in seen or m.shadow_key in shadowed:
                continue
            seen.add(m.dedup_key)
            carried.append(m.clone())
        return carried

    def _specialize(
        self,
        methods: List[MethodDeclaration],
        base: InterfaceDeclaration,
        ref: BaseReference,
    ) -> List[MethodDeclaration]:
        mapping = substitution_map(base.generic_parameters, ref.type_arguments)
        if not mapping:
            return methods
        return [specialize_method(m, mapping) for m in methods]
