from typing import FrozenSet, Iterable

import config
from decl.model import Marker

def _marker_names(verbs: Iterable[str]) -> FrozenSet[str]:
    # "Get" and "GetAttribute" are both accepted
    names = set()
    for verb in verbs:
        names.add(verb)
        names.add(f"{verb}{config.MARKER_SUFFIX}")
    return frozenset(names)

DISPATCH_MARKER_NAMES = _marker_names(config.DISPATCH_VERBS)

def is_dispatch_marker(marker: Marker) -> bool:
    """
    True for e.g. [Get("/users")] or [Refit.PostAttribute("/users")].
    The single argument must be a string literal; constants don't count.
    """
    short_name = marker.name.split(".")[-1]
    return (
        short_name in DISPATCH_MARKER_NAMES
        and len(marker.arguments) == 1
        and marker.arguments[0].kind == "string"
    )

def has_dispatch_marker(markers: Iterable[Marker]) -> bool:
    return any(is_dispatch_marker(m) for m in markers)
