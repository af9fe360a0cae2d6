"""liveorder: canonical callback ordering for Phoenix LiveView modules.

Package use:
    from liveorder import reorder_module, defmodule, use, defn, atom

    module = defmodule("MyAppWeb.PageLive", use("MyAppWeb", atom("live_view")), ...)
    reorder_module(module)
"""

__version__ = "0.1.0"

from .quoted import (
    Atom,
    Node,
    ModuleDocument,
    atom,
    defmodule,
    defn,
    module_attr,
    use,
)
from .style import (
    Archetype,
    ArchetypePolicy,
    DEFAULT_POLICIES,
    StyleInvariantError,
    reorder_module,
    reorder_statements,
)
from .walker import CallbackOrderStyle, Directive, StyleContext, traverse

__all__ = [
    "__version__",
    "Atom",
    "Node",
    "ModuleDocument",
    "atom",
    "defmodule",
    "defn",
    "module_attr",
    "use",
    "Archetype",
    "ArchetypePolicy",
    "DEFAULT_POLICIES",
    "StyleInvariantError",
    "reorder_module",
    "reorder_statements",
    "CallbackOrderStyle",
    "Directive",
    "StyleContext",
    "traverse",
]
