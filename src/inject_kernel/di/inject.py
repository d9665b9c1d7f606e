from __future__ import annotations
import dataclasses
import inspect
import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Optional, Tuple, TypeVar, get_origin, get_type_hints

from .context import get_injector
from .errors import InjectionError, NotInvocableError, ResolutionError
from .types import strip_annotated, unwrap_optional

if TYPE_CHECKING:
    from .registry import Injector

"""
──────────────────────────────────────────────────────────────────────────────
Field population & argument injection
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Fill marked fields of a record, or the parameters of a callable, from
    an Injector.

Field markers (any one is enough):
    - Annotated[T, Inject]                 presence only
    - Annotated[T, Inject("primary")]      key/value
    - Annotated[T, "inject"]               the configured marker string
    - field(metadata={"inject": True})     dataclass metadata

    The marker string defaults to "inject"; change it with INJECT_MARKER.

Mechanics:
    - Reads class annotations (include_extras)
    - Skips private names, ClassVars, and frozen records
    - Supports Optional[T]: left untouched when T is not bound
    - Resolves every field before assigning any

Example:
    @dataclass
    class Handler:
        repo: Annotated[Repo, Inject]
        cache: Annotated[Optional[Cache], Inject] = None
        name: str = "h"

    injector.apply(handler)

    def count(repo: Repo) -> int:
        return repo.count()

    injector.invoke(count)
──────────────────────────────────────────────────────────────────────────────
"""

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_empty = inspect.Parameter.empty


class Inject:
    """Field marker. Use bare (Annotated[T, Inject]) or with a name."""

    __slots__ = ("name",)

    def __init__(self, name: Optional[str] = None):
        self.name = name

    def __repr__(self) -> str:
        return f"Inject({self.name!r})" if self.name else "Inject()"


def _is_marker(meta: Any, marker: str) -> bool:
    return meta is Inject or isinstance(meta, Inject) or (isinstance(meta, str) and meta == marker)


def _is_record(obj: Any) -> bool:
    if obj is None or isinstance(obj, type):
        return False
    return any(inspect.get_annotations(base) for base in type(obj).__mro__ if base is not object)


def _is_frozen(obj: Any) -> bool:
    params = getattr(type(obj), "__dataclass_params__", None)
    return params is not None and params.frozen


def _injectable_fields(obj: Any, marker: str) -> List[Tuple[str, Any]]:
    """(name, declared type) for every marked, settable field."""
    cls = type(obj)
    hints = get_type_hints(cls, include_extras=True)
    dc_meta = {f.name: f.metadata for f in dataclasses.fields(obj)} if dataclasses.is_dataclass(obj) else {}

    out: List[Tuple[str, Any]] = []
    for name, ann in hints.items():
        if name.startswith("_"):
            continue
        if ann is ClassVar or get_origin(ann) is ClassVar:
            continue
        base, metadata = strip_annotated(ann)
        tagged = any(_is_marker(m, marker) for m in metadata)
        if not tagged and not dc_meta.get(name, {}).get(marker):
            continue
        out.append((name, base))
    return out


def apply(injector: "Injector", obj: Any) -> Any:
    """
    Injects marked fields on 'obj' from the injector.
    Non-records and frozen records are returned unchanged.
    Raises ResolutionError (and assigns nothing) if a required type is missing.
    """
    if not _is_record(obj):
        logger.debug("apply: %r is not a record, nothing to inject", obj)
        return obj
    if _is_frozen(obj):
        logger.debug("apply: %s is frozen, nothing to inject", type(obj).__qualname__)
        return obj

    resolved: Dict[str, Any] = {}
    for name, declared in _injectable_fields(obj, injector.settings.marker):
        field_type, optional = unwrap_optional(declared)
        try:
            resolved[name] = injector.get(field_type)
        except ResolutionError:
            if optional:
                continue
            raise ResolutionError(field_type, target=f"{type(obj).__qualname__}.{name}") from None

    for name, value in resolved.items():
        setattr(obj, name, value)
    return obj


def _callable_name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def invoke(injector: "Injector", fn: Callable[..., Any], /, **overrides: Any) -> Any:
    """
    Call fn with every parameter resolved by its annotated type.
    `overrides` pass explicit values by parameter name.
    Nothing is called unless every parameter resolves.
    """
    if not callable(fn):
        raise NotInvocableError(f"cannot invoke {fn!r}: not callable")
    name = _callable_name(fn)
    try:
        sig = inspect.signature(fn, eval_str=True)
    except ValueError as exc:
        raise NotInvocableError(f"cannot invoke {fn!r}: {exc}") from exc
    except NameError as exc:
        raise InjectionError(f"cannot resolve annotations of {name}: {exc}") from exc

    args: List[Any] = []
    kwargs: Dict[str, Any] = {}
    extra = dict(overrides)

    for p in sig.parameters.values():
        if p.kind is p.VAR_POSITIONAL:
            args.extend(extra.pop(p.name, ()))
            continue
        if p.kind is p.VAR_KEYWORD:
            kwargs.update(extra.pop(p.name, {}))
            continue

        if p.name in extra:
            value = extra.pop(p.name)
        elif p.annotation is _empty:
            if p.default is _empty:
                raise InjectionError(f"cannot resolve parameter '{p.name}' of {name}: no type annotation")
            value = p.default
        else:
            base, _ = strip_annotated(p.annotation)
            arg_type, optional = unwrap_optional(base)
            try:
                value = injector.get(arg_type)
            except ResolutionError:
                if p.default is not _empty:
                    value = p.default
                elif optional:
                    value = None
                else:
                    raise ResolutionError(arg_type, target=f"parameter '{p.name}' of {name}") from None

        if p.kind is p.KEYWORD_ONLY:
            kwargs[p.name] = value
        else:
            args.append(value)

    kwargs.update(extra)
    return fn(*args, **kwargs)


def injected(fn: F) -> F:
    """
    Resolve every argument the caller leaves out from the current Injector.

    Usage:
        @injected
        def handle(event: Event, repo: Repo) -> None: ...

        with injector.bound():
            handle(event)     # repo comes from the injector
    """
    sig = inspect.signature(fn)

    if inspect.iscoroutinefunction(fn):
        @wraps(fn)
        async def async_wrapper(*args, **kwargs):
            passed = sig.bind_partial(*args, **kwargs).arguments
            return await invoke(get_injector(), fn, **passed)

        return async_wrapper  # type: ignore[return-value]

    @wraps(fn)
    def wrapper(*args, **kwargs):
        passed = sig.bind_partial(*args, **kwargs).arguments
        return invoke(get_injector(), fn, **passed)

    return wrapper  # type: ignore[return-value]
