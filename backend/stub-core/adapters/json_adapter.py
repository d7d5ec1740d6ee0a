import logging
from typing import Any, Dict, List, Optional, Tuple

import config
from adapters.markers import has_dispatch_marker
from decl.model import (
    Argument,
    BaseReference,
    InterfaceDeclaration,
    Marker,
    MarkerArgument,
    MethodDeclaration,
)
from decl.types import TypeExpression

logger = logging.getLogger(__name__)

class JsonDeclarationAdapter:
    """
    Extractor JSON → declaration model.
    The compiler front end emits one object per interface:
      - name, containing_type, namespace, modifiers
      - generic_parameters, constraint_clauses
      - usings (inside / outside the namespace)
      - bases (name + type_arguments)
      - methods (name, generic_parameters, arguments, return_type,
        markers, optional is_dispatchable)

    Types may be plain type text ("Task<List<T>>") or nested
    {"name": ..., "children": [...]} objects.
    Structural defects raise ValueError naming the offending interface.
    """

    source = "json"

    # ---------------- Helpers ----------------

    VISIBILITY_MODIFIERS = ("public", "internal")

    def _require_str(self, obj: Dict[str, Any], key: str, where: str) -> str:
        value = obj.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{where}: missing or empty '{key}'")
        return value.strip()

    def _list(self, obj: Dict[str, Any], key: str, where: str) -> List[Any]:
        value = obj.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError(f"{where}: '{key}' must be a list")
        return value

    def _type(self, raw: Any, where: str) -> TypeExpression:
        if isinstance(raw, str):
            try:
                return TypeExpression.parse(raw)
            except ValueError as e:
                raise ValueError(f"{where}: {e}") from e
        if isinstance(raw, dict):
            name = self._require_str(raw, "name", where)
            children = self._list(raw, "children", where)
            return TypeExpression(name, tuple(self._type(c, where) for c in children))
        raise ValueError(f"{where}: type must be a string or an object, got {type(raw).__name__}")

    def _visibility(self, modifiers: List[Any]) -> Optional[str]:
        for m in modifiers:
            if m in self.VISIBILITY_MODIFIERS:
                return m
        return None

    def _usings(self, usings: List[Any], where: str) -> Tuple[str, ...]:
        """
        Usings outside the namespace get a global:: qualifier since the
        generated code is put inside one. Defaults the template already
        imports are dropped.
        """
        out: List[str] = []
        for u in usings:
            if isinstance(u, str):
                u = {"name": u}
            if not isinstance(u, dict):
                raise ValueError(f"{where}: using must be a string or an object")
            name = self._require_str(u, "name", where)
            if not u.get("inside_namespace", False) and not name.startswith("global::"):
                name = f"global::{name}"
            alias = (u.get("alias") or "").strip()
            static = "static" if u.get("static") else ""
            text = " ".join(p for p in (alias, static, name) if p)
            if text in out or text in config.DEFAULT_USINGS:
                continue
            out.append(text)
        return tuple(out)

    def _marker(self, raw: Any, where: str) -> Marker:
        if isinstance(raw, str):
            return Marker(name=raw)
        if not isinstance(raw, dict):
            raise ValueError(f"{where}: marker must be a string or an object")
        args = []
        for a in self._list(raw, "arguments", where):
            if isinstance(a, dict):
                args.append(MarkerArgument(kind=str(a.get("kind", "")), value=str(a.get("value", ""))))
            else:
                # bare JSON strings are string literals
                args.append(MarkerArgument(kind="string" if isinstance(a, str) else "expression", value=str(a)))
        return Marker(name=self._require_str(raw, "name", where), arguments=tuple(args))

    # ---------------- Parsing entry points ----------------

    def build_declarations(self, payload: Dict[str, Any]) -> List[InterfaceDeclaration]:
        if not isinstance(payload, dict):
            raise ValueError("Declaration payload must be an object")
        interfaces = self._list(payload, "interfaces", "payload")

        decls: List[InterfaceDeclaration] = []
        for idx, raw in enumerate(interfaces):
            if not isinstance(raw, dict):
                raise ValueError(f"interfaces[{idx}]: must be an object")
            decls.append(self._interface(raw, f"interfaces[{idx}]"))

        logger.debug("Loaded %d interface declarations", len(decls))
        return decls

    # ---------------- Core processing ----------------

    def _interface(self, raw: Dict[str, Any], where: str) -> InterfaceDeclaration:
        short_name = self._require_str(raw, "name", where)
        containing = (raw.get("containing_type") or "").strip()
        name = f"{containing}.{short_name}" if containing else short_name
        where = f"interface {name}"

        generic_parameters = tuple(str(p).strip() for p in self._list(raw, "generic_parameters", where))

        bases = []
        for b in self._list(raw, "bases", where):
            if isinstance(b, str):
                # "IBase<T>" shorthand
                t = self._type(b, where)
                bases.append(BaseReference(t.name, t.children))
                continue
            if not isinstance(b, dict):
                raise ValueError(f"{where}: base must be a string or an object")
            bases.append(
                BaseReference(
                    target_interface_name=self._require_str(b, "name", where),
                    type_arguments=tuple(self._type(t, where) for t in self._list(b, "type_arguments", where)),
                )
            )

        methods = tuple(
            self._method(m, name, f"{where}, methods[{i}]")
            for i, m in enumerate(self._list(raw, "methods", where))
        )

        namespace = raw.get("namespace")
        return InterfaceDeclaration(
            name=name,
            generic_parameters=generic_parameters,
            base_references=tuple(bases),
            own_methods=methods,
            namespace=namespace.strip() if isinstance(namespace, str) and namespace.strip() else None,
            modifiers=self._visibility(self._list(raw, "modifiers", where)),
            constraint_clauses=(raw.get("constraint_clauses") or "").strip(),
            usings=self._usings(self._list(raw, "usings", where), where),
        )

    def _method(self, raw: Any, owner: str, where: str) -> MethodDeclaration:
        if not isinstance(raw, dict):
            raise ValueError(f"{where}: method must be an object")
        name = self._require_str(raw, "name", where)
        where = f"{where} ({name})"

        args = []
        for a in self._list(raw, "arguments", where):
            if not isinstance(a, dict):
                raise ValueError(f"{where}: argument must be an object")
            args.append(Argument(self._require_str(a, "name", where), self._type(a.get("type"), where)))

        markers = tuple(self._marker(m, where) for m in self._list(raw, "markers", where))

        dispatchable = raw.get("is_dispatchable")
        if dispatchable is None:
            dispatchable = has_dispatch_marker(markers)

        return MethodDeclaration(
            name=name,
            owner_interface_name=owner,
            return_type=self._type(raw.get("return_type") or "void", where),
            arguments=tuple(args),
            method_generic_parameters=tuple(str(p).strip() for p in self._list(raw, "generic_parameters", where)),
            is_dispatchable=bool(dispatchable),
            markers=markers,
        )
