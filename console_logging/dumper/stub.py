"""
Dump Tree Nodes

A cloned value is a tree of ``Stub`` nodes wrapped in a ``Data`` object.
"""

from typing import Any, List, Optional, Tuple


class Stub:
    """One node of a cloned value."""

    TYPE_SCALAR = "scalar"
    TYPE_STRING = "string"
    TYPE_HASH = "hash"
    TYPE_OBJECT = "object"
    TYPE_RECURSION = "recursion"

    HASH_DICT = "dict"
    HASH_LIST = "list"
    HASH_TUPLE = "tuple"
    HASH_SET = "set"

    # cut value set by casters that hide every child
    CUT_TRUNCATED = -1

    __slots__ = ("type", "class_name", "value", "hash_type", "children", "cut", "handle")

    def __init__(
        self,
        type: str,
        value: Any = None,
        class_name: str = "",
        hash_type: Optional[str] = None
    ):
        self.type = type
        self.value = value
        self.class_name = class_name
        self.hash_type = hash_type
        self.children: List[Tuple[Any, "Stub"]] = []
        self.cut = 0
        self.handle = 0

    @property
    def is_truncated(self) -> bool:
        return self.cut == self.CUT_TRUNCATED

    def __repr__(self) -> str:
        return f"Stub(type={self.type!r}, class_name={self.class_name!r}, children={len(self.children)}, cut={self.cut})"


class Data:
    """Cloned value ready to be dumped."""

    __slots__ = ("_root", "_ref_handles")

    def __init__(self, root: Stub, ref_handles: bool = True):
        self._root = root
        self._ref_handles = ref_handles

    @property
    def root(self) -> Stub:
        return self._root

    @property
    def ref_handles(self) -> bool:
        """Whether object handles (``#3``) are shown when dumping."""
        return self._ref_handles

    def with_ref_handles(self, enabled: bool) -> "Data":
        """Return a view of the same tree with handle display switched on or off."""
        return Data(self._root, enabled)
