"""JSON serialization/deserialization for instruction trees.

This module converts between instruction node dataclasses and plain
dict/list structures suitable for JSON encoding. A whole program is
wrapped as `{"type": "Program", "body": [...]}`; a loop is
`{"type": "Loop", "body": [...]}`; every other node is just
`{"type": <name>}`.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import Node, Increment, Decrement, Forward, Backward, Loop, LoopEnd, Out, In


_LEAF_TYPES = {
    cls.__name__: cls
    for cls in (Increment, Decrement, Forward, Backward, LoopEnd, Out, In)
}


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, list):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node]}
    if isinstance(node, Loop):
        return {"type": "Loop", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Node) and type(node).__name__ in _LEAF_TYPES:
        return {"type": type(node).__name__}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if isinstance(obj, dict) and obj.get("type") == "Program":
        return _body_from_obj(obj)
    return _node_from_obj(obj)


def _node_from_obj(obj: Any) -> Node:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        raise ValueError("Program is only allowed at the top level")
    if t == "Loop":
        return Loop(body=_body_from_obj(obj))
    if t in _LEAF_TYPES:
        return _LEAF_TYPES[t]()

    raise ValueError(f"Unknown AST node type: {t}")


def _body_from_obj(obj: Dict[str, Any]) -> List[Node]:
    return [_node_from_obj(n) for n in obj.get("body", [])]
