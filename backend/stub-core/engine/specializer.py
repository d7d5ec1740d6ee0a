# backend/stub-core/engine/specializer.py
"""
Generic specialization across one inheritance edge.

For `interface B<U> : A<U>` the edge B -> A binds A's `T` to `U`; every method
B inherits from A is rewritten with that binding. Matching is purely by name.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Mapping, Sequence

from decl.model import Argument, MethodDeclaration
from decl.types import TypeExpression

logger = logging.getLogger(__name__)

SubstitutionMap = Dict[str, TypeExpression]


def substitution_map(
    generic_parameters: Sequence[str],
    type_arguments: Sequence[TypeExpression],
) -> SubstitutionMap:
    """
    Pair the base's generic parameters with the arguments given at the
    inheritance site. Identity bindings (`B<T> : A<T>`) are left out.
    """
    if len(generic_parameters) != len(type_arguments):
        logger.debug(
            "Arity mismatch: parameters %s vs arguments %s; extra entries left unmapped",
            list(generic_parameters), [str(t) for t in type_arguments],
        )

    mapping: SubstitutionMap = {}
    for param, arg in zip(generic_parameters, type_arguments):
        if str(arg) != param:
            mapping[param] = arg
    return mapping


def replace_generic_types(expr: TypeExpression, mapping: Mapping[str, TypeExpression]) -> TypeExpression:
    """
    Rebuild `expr` with every node named after a mapped parameter replaced
    (name and children) by a copy of its target. Replacements are not
    substituted again.
    """
    target = mapping.get(expr.name)
    if target is not None:
        return target.clone()
    return TypeExpression(expr.name, tuple(replace_generic_types(c, mapping) for c in expr.children))


def replace_generic_type(name: str, mapping: Mapping[str, TypeExpression]) -> str:
    # method-level generic parameters only ever become text
    target = mapping.get(name)
    return str(target) if target is not None else name


def specialize_method(method: MethodDeclaration, mapping: Mapping[str, TypeExpression]) -> MethodDeclaration:
    return replace(
        method,
        arguments=tuple(Argument(a.name, replace_generic_types(a.type, mapping)) for a in method.arguments),
        return_type=replace_generic_types(method.return_type, mapping),
        method_generic_parameters=tuple(replace_generic_type(p, mapping) for p in method.method_generic_parameters),
        owner_type_parameters=tuple(replace_generic_type(p, mapping) for p in method.owner_type_parameters),
    )
