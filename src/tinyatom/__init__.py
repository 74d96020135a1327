"""tinyatom - minimal synchronous reactive state container."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tinyatom")
except PackageNotFoundError:
    __version__ = "0+local"
from tinyatom.atom import Atom, create_atom
from tinyatom.config import AtomOptions
from tinyatom.exceptions import AtomConfigError, AtomError, UnknownActionError
from tinyatom.models import Action, TraceKind, TraceRecord, Update
from tinyatom.registry import ActionRegistry, default_evolve
from tinyatom.store import merge_shallow
from tinyatom.tracing import DispatchContext, log_tracer

__all__ = [
    "__version__",
    "Action",
    "ActionRegistry",
    "Atom",
    "AtomConfigError",
    "AtomError",
    "AtomOptions",
    "DispatchContext",
    "TraceKind",
    "TraceRecord",
    "UnknownActionError",
    "Update",
    "create_atom",
    "default_evolve",
    "log_tracer",
    "merge_shallow",
]
