from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Optional, Tuple

import config
from decl.types import TypeExpression

Visibility = Literal["public", "internal"]

def _typeof(type_text: str) -> str:
    if type_text.endswith("?"):
        return f"ToNullable(typeof({type_text[:-1]}))"
    return f"typeof({type_text})"

@dataclass(frozen=True)
class MarkerArgument:
    kind: str                 # "string" for string literals, anything else otherwise
    value: str = ""

@dataclass(frozen=True)
class Marker:
    name: str                 # as written, e.g. "Get", "Refit.PostAttribute"
    arguments: Tuple[MarkerArgument, ...] = ()

@dataclass(frozen=True)
class Argument:
    name: str
    type: TypeExpression

@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    owner_interface_name: str # interface that declared it, kept on inherited copies
    return_type: TypeExpression
    arguments: Tuple[Argument, ...] = ()
    method_generic_parameters: Tuple[str, ...] = ()
    is_dispatchable: bool = False
    markers: Tuple[Marker, ...] = ()
    # owner interface's generic arguments as text, specialized on every edge (A<T> -> A<string>)
    owner_type_parameters: Tuple[str, ...] = ()

    @property
    def dedup_key(self) -> Tuple[str, int, str]:
        # argument types are not part of the key
        return (self.owner_interface_name, len(self.method_generic_parameters), self.name)

    @property
    def shadow_key(self) -> Tuple[int, str]:
        # an own method hides inherited ones with this key, whatever their owner
        return (len(self.method_generic_parameters), self.name)

    @property
    def argument_list(self) -> str:
        return ", ".join(a.name for a in self.arguments)

    @property
    def argument_list_with_types(self) -> str:
        return ", ".join(f"{a.type} {a.name}" for a in self.arguments)

    @property
    def return_type_text(self) -> str:
        return str(self.return_type)

    @property
    def argument_types_list(self) -> str:
        return ", ".join(_typeof(str(a.type)) for a in self.arguments)

    @property
    def method_type_parameters(self) -> Optional[str]:
        if not self.method_generic_parameters:
            return None
        return ", ".join(self.method_generic_parameters)

    @property
    def method_type_parameter_list(self) -> Optional[str]:
        if not self.method_generic_parameters:
            return None
        return ", ".join(f"typeof({p})" for p in self.method_generic_parameters)

    @property
    def method_type_parameter_names(self) -> Optional[str]:
        if not self.method_generic_parameters:
            return None
        return ", ".join(f"{{typeof({p}).AssemblyQualifiedName}}" for p in self.method_generic_parameters)

    @property
    def owner_type_arguments(self) -> Optional[str]:
        if not self.owner_type_parameters:
            return None
        return ", ".join(self.owner_type_parameters)

    @property
    def qualified_owner_name(self) -> str:
        """Owner as the generated class must name it, e.g. "A<string>"."""
        args = self.owner_type_arguments
        return f"{self.owner_interface_name}<{args}>" if args else self.owner_interface_name

    def clone(self) -> "MethodDeclaration":
        return MethodDeclaration(
            name=self.name,
            owner_interface_name=self.owner_interface_name,
            return_type=self.return_type.clone(),
            arguments=tuple(Argument(a.name, a.type.clone()) for a in self.arguments),
            method_generic_parameters=tuple(self.method_generic_parameters),
            is_dispatchable=self.is_dispatchable,
            markers=self.markers,
            owner_type_parameters=tuple(self.owner_type_parameters),
        )

    def to_debug_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "interface_name": self.owner_interface_name,
            "interface_type_parameters": self.owner_type_arguments,
            "qualified_interface_name": self.qualified_owner_name,
            "method_type_parameters": list(self.method_generic_parameters),
            "arguments": [{"name": a.name, "type": str(a.type)} for a in self.arguments],
            "argument_list": self.argument_list,
            "argument_list_with_types": self.argument_list_with_types,
            "argument_types_list": self.argument_types_list,
            "method_type_parameter_list": self.method_type_parameter_list,
            "method_type_parameter_names": self.method_type_parameter_names,
            "return_type": self.return_type_text,
            "is_dispatchable": self.is_dispatchable,
        }

@dataclass(frozen=True)
class BaseReference:
    target_interface_name: str
    type_arguments: Tuple[TypeExpression, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.type_arguments)

    @property
    def lookup_key(self) -> Tuple[str, int]:
        return (self.target_interface_name, self.arity)

    def __str__(self) -> str:
        return str(TypeExpression(self.target_interface_name, self.type_arguments))

@dataclass(frozen=True)
class InterfaceDeclaration:
    name: str
    generic_parameters: Tuple[str, ...] = ()
    base_references: Tuple[BaseReference, ...] = ()
    own_methods: Tuple[MethodDeclaration, ...] = ()
    # pass-through attributes for the renderer, filled by extraction
    namespace: Optional[str] = None
    modifiers: Optional[Visibility] = None
    constraint_clauses: str = ""
    usings: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # own methods carry this interface's generic parameters until specialized
        if self.generic_parameters and any(
            m.owner_interface_name == self.name and not m.owner_type_parameters for m in self.own_methods
        ):
            methods = tuple(
                replace(m, owner_type_parameters=tuple(self.generic_parameters))
                if m.owner_interface_name == self.name and not m.owner_type_parameters else m
                for m in self.own_methods
            )
            object.__setattr__(self, "own_methods", methods)

    @property
    def arity(self) -> int:
        return len(self.generic_parameters)

    @property
    def lookup_key(self) -> Tuple[str, int]:
        return (self.name, self.arity)

    @property
    def generated_class_suffix(self) -> str:
        return self.name.replace(".", "")

    @property
    def effective_namespace(self) -> str:
        return self.namespace or f"{config.NAMESPACE_PREFIX}{self.generated_class_suffix}"

    @property
    def type_parameters(self) -> Optional[str]:
        if not self.generic_parameters:
            return None
        return ", ".join(self.generic_parameters)

@dataclass
class FlattenedInterface:
    declaration: InterfaceDeclaration
    merged_methods: List[MethodDeclaration] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def has_any_methods_with_nullable_arguments(self) -> bool:
        return any(
            str(a.type).endswith("?")
            for m in self.merged_methods
            for a in m.arguments
        )

    def to_debug_json(self) -> Dict[str, Any]:
        d = self.declaration
        return {
            "interface_name": d.name,
            "generated_class_suffix": d.generated_class_suffix,
            "namespace": d.effective_namespace,
            "modifiers": d.modifiers,
            "type_parameters": d.type_parameters,
            "constraint_clauses": d.constraint_clauses,
            "usings": list(d.usings),
            "base_classes": [str(b) for b in d.base_references],
            "has_any_methods_with_nullable_arguments": self.has_any_methods_with_nullable_arguments,
            "methods": [m.to_debug_json() for m in self.merged_methods],
        }
