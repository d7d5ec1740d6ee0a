import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx # type: ignore

from decl.model import BaseReference, InterfaceDeclaration

logger = logging.getLogger(__name__)

def node_id(key: Tuple[str, int]) -> str:
    name, arity = key
    return f"iface:{name}`{arity}"

class InheritanceGraph:
    """
    Typed multi-graph over one declaration set.
    Nodes: one InterfaceDeclaration per (name, arity) key
    Edges: BASE (descendant -> base), carrying position and type arguments.
    Base references whose target is not in the set get no edge; they are
    external interfaces and contribute nothing.
    """
    def __init__(self, declarations: Iterable[InterfaceDeclaration] = ()) -> None:
        self.g = nx.MultiDiGraph()
        self._order: List[Tuple[str, int]] = []

        for decl in declarations:
            self.add_declaration(decl)
        self._link_bases()

    def add_declaration(self, decl: InterfaceDeclaration) -> None:
        nid = node_id(decl.lookup_key)
        if nid in self.g:
            logger.warning(
                "Duplicate interface declaration %s (arity %d); keeping the first one",
                decl.name, decl.arity,
            )
            return
        self.g.add_node(nid, kind="Interface", payload=decl)
        self._order.append(decl.lookup_key)

    def _link_bases(self) -> None:
        for key in self._order:
            decl = self.get(key)
            for position, ref in enumerate(decl.base_references):
                if self.resolve(ref) is None:
                    logger.debug("Base %s of %s is external; treated as a leaf", ref, decl.name)
                    continue
                self.g.add_edge(
                    node_id(key),
                    node_id(ref.lookup_key),
                    etype="BASE",
                    position=position,
                    type_arguments=[str(t) for t in ref.type_arguments],
                )

    # ---------------- Lookup ----------------

    def get(self, key: Tuple[str, int]) -> Optional[InterfaceDeclaration]:
        data = self.g.nodes.get(node_id(key))
        return data["payload"] if data else None

    def resolve(self, ref: BaseReference) -> Optional[InterfaceDeclaration]:
        return self.get(ref.lookup_key)

    def declarations(self) -> List[InterfaceDeclaration]:
        """All declarations, in the order they were first declared."""
        return [self.get(k) for k in self._order]

    def closure(self, decl: InterfaceDeclaration) -> List[InterfaceDeclaration]:
        """Every declaration reachable through base references (cycle-safe)."""
        return [self.g.nodes[n]["payload"] for n in nx.descendants(self.g, node_id(decl.lookup_key))]

    # ---------------- Views ----------------

    def to_debug_json(self) -> Dict[str, Any]:
        nodes = []
        for nid, data in self.g.nodes(data=True):
            decl = data["payload"]
            nodes.append({
                "id": nid,
                "kind": data.get("kind"),
                "attrs": {
                    "name": decl.name,
                    "generic_parameters": list(decl.generic_parameters),
                    "methods": [m.name for m in decl.own_methods],
                },
            })

        edges = []
        for src, dst, data in self.g.edges(data=True):
            edges.append({
                "src": src,
                "dst": dst,
                "type": data.get("etype"),
                "position": data.get("position"),
                "type_arguments": data.get("type_arguments", []),
            })

        return {"nodes": nodes, "edges": edges}
