from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from decl.graph import InheritanceGraph
from decl.model import InterfaceDeclaration

logger = logging.getLogger(__name__)


class EligibilityFilter:
    """
    An interface gets a generated class iff it, or anything it inherits from,
    declares at least one dispatchable method. External bases count as having none.
    """

    def __init__(self, graph: InheritanceGraph) -> None:
        self.graph = graph
        self._memo: Dict[Tuple[str, int], bool] = {}

    def is_eligible(self, decl: InterfaceDeclaration) -> bool:
        key = decl.lookup_key
        if key not in self._memo:
            candidates = [decl, *self.graph.closure(decl)]
            self._memo[key] = any(m.is_dispatchable for c in candidates for m in c.own_methods)
            if not self._memo[key]:
                logger.debug("Skipping %s: no dispatchable method in its inheritance closure", decl.name)
        return self._memo[key]

    def eligible_interfaces(self) -> List[InterfaceDeclaration]:
        return [d for d in self.graph.declarations() if self.is_eligible(d)]
