from __future__ import annotations

from typing import Sequence, Tuple


class StubGeneratorError(Exception):
    """Base class for errors raised by the flattening engine."""


class CyclicInheritanceError(StubGeneratorError):
    """
    An interface (transitively) extends itself.
    `path` lists the (name, arity) keys from the first interface entered back
    to the repeated one.
    """

    def __init__(self, path: Sequence[Tuple[str, int]]) -> None:
        self.path = list(path)
        chain = " -> ".join(_fmt(k) for k in self.path)
        super().__init__(f"Cyclic interface inheritance: {chain}")


def _fmt(key: Tuple[str, int]) -> str:
    name, arity = key
    return name if arity == 0 else f"{name}`{arity}"
