"""
Value Dumper

Clones arbitrary values into a tree and renders the tree for terminals.
"""

from .stub import Stub, Data
from .cloner import Caster, VarCloner
from .cli_dumper import CliDumper
from .casters import is_atomic_value, is_date_like

__all__ = ["Stub", "Data", "Caster", "VarCloner", "CliDumper", "is_atomic_value", "is_date_like"]
