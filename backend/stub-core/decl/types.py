# backend/stub-core/decl/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class TypeExpression:
    """
    Syntactic (possibly generic) type reference.

    Examples:
      int                      -> TypeExpression("int")
      List<T>                  -> TypeExpression("List", (TypeExpression("T"),))
      Dictionary<string, T[]>  -> TypeExpression("Dictionary", (string, "T[]"))

    Never mutated; substitution always builds a new tree.
    """
    name: str
    children: Tuple["TypeExpression", ...] = ()

    def __str__(self) -> str:
        if not self.children:
            return self.name
        return f"{self.name}<{', '.join(str(c) for c in self.children)}>"

    @property
    def is_generic(self) -> bool:
        return bool(self.children)

    def clone(self) -> "TypeExpression":
        return TypeExpression(self.name, tuple(c.clone() for c in self.children))

    def to_debug_json(self):
        return {"name": self.name, "children": [c.to_debug_json() for c in self.children]}

    @classmethod
    def named(cls, name: str, *children: "TypeExpression") -> "TypeExpression":
        return cls(name, tuple(children))

    @classmethod
    def parse(cls, text: str) -> "TypeExpression":
        """
        Build a tree from type text such as ``Task<List<T>>``.
        Anything trailing the closing ``>`` (``?``, ``[]``) turns the whole
        text into an opaque leaf, as does a tuple type like ``(int Id, string Name)``.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("Empty type expression")

        if text.startswith("("):
            _check_balanced(text)
            return cls(text)

        open_idx = text.find("<")
        if open_idx == -1:
            if any(ch in text for ch in ">,()"):
                raise ValueError(f"Malformed type expression: {text!r}")
            return cls(text)

        close_idx = _matching_close(text, open_idx)
        name = text[:open_idx].strip()
        if not name or "(" in name or ")" in name:
            raise ValueError(f"Malformed type expression: {text!r}")

        trailing = text[close_idx + 1:].strip()
        if any(ch in trailing for ch in "<>()"):
            raise ValueError(f"Malformed type expression: {text!r}")
        if trailing:
            # e.g. List<int>? or List<int>[] -> leaf
            _split_top_level(text[open_idx + 1:close_idx], text)
            return cls(text)

        parts = _split_top_level(text[open_idx + 1:close_idx], text)
        return cls(name, tuple(cls.parse(p) for p in parts))


def _check_balanced(text: str) -> None:
    angle = paren = 0
    for ch in text:
        if ch == "<":
            angle += 1
        elif ch == ">":
            angle -= 1
        elif ch == "(":
            paren += 1
        elif ch == ")":
            paren -= 1
        if angle < 0 or paren < 0:
            break
    if angle or paren:
        raise ValueError(f"Unbalanced brackets in type expression: {text!r}")


def _matching_close(text: str, open_idx: int) -> int:
    depth = 0
    for i in range(open_idx, len(text)):
        ch = text[i]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return i
    raise ValueError(f"Unbalanced '<' in type expression: {text!r}")


def _split_top_level(inner: str, original: str) -> List[str]:
    # commas inside nested generics or tuple parentheses do not split
    parts: List[str] = []
    angle = paren = 0
    start = 0
    for i, ch in enumerate(inner):
        if ch == "<":
            angle += 1
        elif ch == ">":
            angle -= 1
        elif ch == "(":
            paren += 1
        elif ch == ")":
            paren -= 1
        elif ch == "," and angle == 0 and paren == 0:
            parts.append(inner[start:i])
            start = i + 1
        if angle < 0 or paren < 0:
            raise ValueError(f"Unbalanced brackets in type expression: {original!r}")
    if paren:
        raise ValueError(f"Unbalanced '(' in type expression: {original!r}")
    parts.append(inner[start:])

    parts = [p.strip() for p in parts]
    if any(not p for p in parts):
        raise ValueError(f"Empty type argument in type expression: {original!r}")
    return parts
