from __future__ import annotations
import inspect
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, TypeVar, get_args, get_origin

from inject_kernel.config.base_settings import InjectSettings, get_settings
from .context import reset_injector, set_injector
from .errors import InjectionError, ResolutionError, type_name
from .inject import apply as _apply, invoke as _invoke
from .types import implements, interface_of, is_interface, require_interface, strip_annotated, unwrap_optional

"""
──────────────────────────────────────────────────────────────────────────────
Type-keyed Injector
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Keep an insertion-ordered list of (type, value) bindings and resolve
    values by type, falling back to a parent Injector.

APIs:
    - map(value)               → bind type(value)
    - map_to(value, witness)   → bind the interface named by witness
    - set(type_, value)        → bind an explicit type
    - provide(factory)         → invoke factory, bind what it returns
    - get(type_)               → exact match, then implementors, then parent
    - get_all(interface)       → every implementor, local first then parent
    - set_parent(parent)
    - apply(obj) / invoke(fn)  → see di/inject.py

Lookup order for get(T):
    1. first binding whose type == T
    2. if T is an interface: first binding whose type implements T
    3. parent.get(T)
    4. ResolutionError

Usage:
    inj = Injector().map(Config()).map_to(PgRepo(), Repo)
    repo = inj.get(Repo)
    result = inj.invoke(handler)
──────────────────────────────────────────────────────────────────────────────
"""

logger = logging.getLogger(__name__)

T = TypeVar("T")
_MISSING = object()


@dataclass(frozen=True)
class Binding:
    type: Any
    value: Any


class Injector:
    """Ordered type → value registry with an optional parent."""

    def __init__(self, parent: Optional["Injector"] = None, *, settings: Optional[InjectSettings] = None):
        self._bindings: List[Binding] = []
        self._parent = parent
        self._lock = threading.RLock()
        self.settings: InjectSettings = settings or get_settings()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def map(self, value: Any) -> "Injector":
        """Bind value under its own runtime type."""
        return self._append(type(value), value)

    def map_to(self, value: Any, witness: Any) -> "Injector":
        """
        Bind value under the interface named by witness.
        The value is not checked against the interface.
        """
        return self._append(interface_of(witness), value)

    def set(self, type_: Any, value: Any) -> "Injector":
        """Bind value under an explicit type (e.g. list[int], a NewType)."""
        return self._append(type_, value)

    def provide(self, factory: Callable[..., Any]) -> "Injector":
        """
        Invoke factory with resolved arguments and bind every value it returns.
        A tuple result binds each element; None binds nothing.
        """
        result = self.invoke(factory)
        for type_, value in _provided(factory, result):
            self._append(type_, value)
        return self

    def _append(self, type_: Any, value: Any) -> "Injector":
        with self._lock:
            self._bindings.append(Binding(type_, value))
        if self.settings.log_bindings:
            logger.debug("bound %s → %r", type_name(type_), value)
        return self

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def get(self, type_: Any) -> Any:
        value = self._find(type_)
        if value is _MISSING:
            logger.debug("no instance found for %s", type_name(type_))
            raise ResolutionError(type_)
        return value

    def has(self, type_: Any) -> bool:
        return self._find(type_) is not _MISSING

    def get_all(self, interface: Any) -> List[Any]:
        require_interface(interface)
        values: List[Any] = []
        for node in self._chain():
            values.extend(b.value for b in node.bindings if implements(b.type, interface))
        return values

    def _find(self, type_: Any) -> Any:
        iface = is_interface(type_)
        for node in self._chain():
            value = node._lookup(type_, iface)
            if value is not _MISSING:
                return value
        return _MISSING

    def _lookup(self, type_: Any, iface: bool) -> Any:
        bindings = self.bindings
        for b in bindings:
            if b.type == type_:
                return b.value

        # no concrete match, try implementors
        if iface:
            for b in bindings:
                if implements(b.type, type_):
                    return b.value
        return _MISSING

    def _chain(self) -> Iterator["Injector"]:
        """This injector, then its ancestors. Stops at the first repeat."""
        seen = set()
        node: Optional[Injector] = self
        while node is not None:
            if id(node) in seen:
                logger.warning("parent cycle detected at %r; treating as end of chain", node)
                return
            seen.add(id(node))
            yield node
            node = node.parent

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------
    @property
    def parent(self) -> Optional["Injector"]:
        with self._lock:
            return self._parent

    def set_parent(self, parent: Optional["Injector"]) -> None:
        with self._lock:
            self._parent = parent

    def child(self) -> "Injector":
        """New empty Injector that falls back to this one."""
        return Injector(self, settings=self.settings)

    # ------------------------------------------------------------------
    # Consumers
    # ------------------------------------------------------------------
    def apply(self, obj: T) -> T:
        return _apply(self, obj)

    def invoke(self, fn: Callable[..., T], /, **overrides: Any) -> T:
        return _invoke(self, fn, **overrides)

    @contextmanager
    def bound(self) -> Iterator["Injector"]:
        """Bind this Injector as the current one for the enclosed block."""
        token = set_injector(self)
        try:
            yield self
        finally:
            reset_injector(token)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def bindings(self) -> Tuple[Binding, ...]:
        with self._lock:
            return tuple(self._bindings)

    def __repr__(self) -> str:
        return f"<Injector bindings={len(self.bindings)} parent={'yes' if self.parent is not None else 'no'}>"


def new(parent: Optional[Injector] = None) -> Injector:
    return Injector(parent)


# ──────────────────────────────────────────────────────────────
# provide() helpers
# ──────────────────────────────────────────────────────────────
def _declared(ann: Any) -> Any:
    if ann is inspect.Signature.empty or ann is Any or ann is None:
        return None
    ann, _ = strip_annotated(ann)
    ann, _ = unwrap_optional(ann)
    return ann


def _return_annotation(factory: Callable[..., Any]) -> Any:
    if inspect.isclass(factory):
        return factory
    try:
        return _declared(inspect.signature(factory, eval_str=True).return_annotation)
    except (TypeError, ValueError):
        return None
    except NameError as exc:
        name = getattr(factory, "__qualname__", None) or repr(factory)
        raise InjectionError(f"cannot resolve return annotation of {name}: {exc}") from exc


def _provided(factory: Callable[..., Any], result: Any) -> Sequence[Tuple[Any, Any]]:
    """(type, value) pairs to bind for a factory result."""
    if result is None:
        return ()
    ann = _return_annotation(factory)

    if type(result) is tuple:
        declared: Sequence[Any] = ()
        if get_origin(ann) is tuple:
            declared = [_declared(a) for a in get_args(ann)]
        if len(declared) != len(result) or Ellipsis in declared:
            declared = [None] * len(result)
        return [(t if t is not None else type(v), v) for t, v in zip(declared, result)]

    if ann is None or get_origin(ann) is tuple:
        return [(type(result), result)]
    return [(ann, result)]
