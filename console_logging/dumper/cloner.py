"""
Value Cloner

Clones arbitrary Python values into a ``Data`` tree, applying casters on the way.
"""

from collections.abc import Mapping, Set
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Protocol, runtime_checkable

from .casters import class_name, object_fields
from .stub import Data, Stub

SCALAR_TYPES = (type(None), bool, int, float, complex)
STRING_TYPES = (str, bytes, bytearray)


@runtime_checkable
class Caster(Protocol):
    """Hook called for every compound value while cloning."""

    def cast(self, value: Any, fields: Dict[Any, Any], stub: Stub, is_nested: bool) -> Dict[Any, Any]:
        """
        Adjust the fields the cloner is about to descend into.

        Args:
            value: The value being cloned
            fields: Fields collected so far
            stub: Node for the value; setting ``stub.cut`` marks elided children
            is_nested: False only for the root value of the clone

        Returns:
            The fields to clone as children
        """
        ...


class VarCloner:
    """
    Clones values into dumpable trees.

    Compound values (dicts, sequences, sets, objects) receive a handle; a value
    reached again while it is still being cloned becomes a recursion node.
    """

    def __init__(
        self,
        casters: Iterable[Caster] = (),
        max_items: int = 2500,
        max_string: int = -1,
        max_depth: int = 64
    ):
        """
        Initialize the cloner.

        Args:
            casters: Hooks applied, in order, to every compound value
            max_items: Maximum number of children cloned per call (-1 for no limit)
            max_string: Maximum cloned string length (-1 for no limit)
            max_depth: Values deeper than this are truncated
        """
        self._casters: List[Caster] = list(casters)
        self.max_items = max_items
        self.max_string = max_string
        self.max_depth = max_depth

    def clone_var(self, value: Any) -> Data:
        """
        Clone a value.

        Args:
            value: Any Python value

        Returns:
            The cloned tree
        """
        state = _CloneState()
        root = self._clone(value, 0, frozenset(), state)
        return Data(root)

    def _clone(self, value: Any, depth: int, path: FrozenSet[int], state: "_CloneState") -> Stub:
        # int and str based enum members are dumped as objects
        if not isinstance(value, Enum):
            if isinstance(value, SCALAR_TYPES):
                return Stub(Stub.TYPE_SCALAR, value, class_name(value))

            if isinstance(value, STRING_TYPES):
                return self._clone_string(value)

        if id(value) in path:
            return Stub(Stub.TYPE_RECURSION, class_name=class_name(value))

        hash_type = _hash_type(value)
        if hash_type is not None:
            stub = Stub(Stub.TYPE_HASH, class_name=class_name(value), hash_type=hash_type)
            fields = _hash_fields(value, hash_type)
        else:
            stub = Stub(Stub.TYPE_OBJECT, class_name=class_name(value))
            fields = object_fields(value)

        state.handles += 1
        stub.handle = state.handles

        is_nested = depth > 0
        for caster in self._casters:
            fields = caster.cast(value, fields, stub, is_nested)

        if stub.is_truncated:
            return stub

        if depth >= self.max_depth and fields:
            stub.cut = Stub.CUT_TRUNCATED
            return stub

        child_path = path | {id(value)}
        remaining = len(fields)
        for key, child in fields.items():
            if 0 <= self.max_items <= state.items:
                stub.cut = remaining
                break
            state.items += 1
            remaining -= 1
            stub.children.append((key, self._clone(child, depth + 1, child_path, state)))

        return stub

    def _clone_string(self, value: Any) -> Stub:
        stub = Stub(Stub.TYPE_STRING, value, class_name(value))
        if 0 <= self.max_string < len(value):
            stub.cut = len(value) - self.max_string
            stub.value = value[:self.max_string]
        return stub


class _CloneState:
    __slots__ = ("items", "handles")

    def __init__(self) -> None:
        self.items = 0
        self.handles = 0


def _hash_type(value: Any) -> Optional[str]:
    if isinstance(value, Mapping):
        return Stub.HASH_DICT
    if isinstance(value, tuple):
        return Stub.HASH_TUPLE
    if isinstance(value, list):
        return Stub.HASH_LIST
    if isinstance(value, Set):
        return Stub.HASH_SET
    return None


def _hash_fields(value: Any, hash_type: str) -> Dict[Any, Any]:
    if hash_type == Stub.HASH_DICT:
        return dict(value.items())
    return dict(enumerate(value))
