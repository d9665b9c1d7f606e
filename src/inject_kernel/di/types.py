# inject_kernel/di/types.py
from __future__ import annotations
import inspect
import types
from abc import ABC
from typing import Annotated, Any, Generic, Protocol, Tuple, Union, get_args, get_origin

from .errors import NotAnInterfaceError, WitnessError, type_name

"""
──────────────────────────────────────────────────────────────────────────────
Runtime type helpers
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Decide which classes count as interfaces, whether a bound type satisfies
    one, and how to peel typing wrappers off an annotation.

Interfaces:
    - typing.Protocol classes (runtime_checkable or not)
    - ABCs: classes listing abc.ABC among their bases, or carrying
      abstract methods

Witnesses:
    map_to() takes a witness naming an interface. Any of these work:
        Repo, type[Repo], Annotated[Repo, ...], Optional[Repo]
──────────────────────────────────────────────────────────────────────────────
"""

_UNION_TYPES = (Union, types.UnionType)


def is_protocol(tp: Any) -> bool:
    return isinstance(tp, type) and tp is not Protocol and bool(getattr(tp, "_is_protocol", False))


def is_interface(tp: Any) -> bool:
    """True for Protocol classes and abstract base classes."""
    if not isinstance(tp, type):
        return False
    if is_protocol(tp):
        return True
    if tp is ABC:
        return False
    return ABC in tp.__bases__ or inspect.isabstract(tp)


def require_interface(tp: Any) -> Any:
    if not is_interface(tp):
        raise NotAnInterfaceError(
            f"cannot get all implementors for non interface type {type_name(tp)}"
        )
    return tp


def strip_annotated(tp: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Annotated[T, a, b] → (T, (a, b)); anything else → (tp, ())."""
    if get_origin(tp) is Annotated:
        args = get_args(tp)
        return args[0], tuple(args[1:])
    return tp, ()


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """Optional[T] / T | None → (T, True); anything else → (tp, False)."""
    if get_origin(tp) in _UNION_TYPES:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1 and len(get_args(tp)) == 2:
            return args[0], True
    return tp, False


def interface_of(witness: Any) -> Any:
    """
    Dereference a witness down to the interface it names.
    Raises WitnessError if it does not end in an interface.
    """
    tp = witness
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
        elif origin is type:
            tp = get_args(tp)[0]
        elif origin in _UNION_TYPES:
            inner, optional = unwrap_optional(tp)
            if not optional:
                break
            tp = inner
        else:
            break

    if not is_interface(tp):
        raise WitnessError(
            f"called interface_of with a value that is not an interface: {type_name(witness)}. "
            "Pass a Protocol or ABC class, e.g. map_to(value, MyInterface)"
        )
    return tp


def _protocol_members(proto: type) -> set[str]:
    names: set[str] = set()
    for base in proto.__mro__:
        if base in (object, Protocol, Generic) or not getattr(base, "_is_protocol", False):
            continue
        names.update(inspect.get_annotations(base))
        names.update(n for n in base.__dict__ if not n.startswith("_"))
    return {n for n in names if not n.startswith("_")}


def _declares(cls: type, name: str) -> bool:
    if hasattr(cls, name):
        return True
    return any(name in inspect.get_annotations(base) for base in cls.__mro__)


def implements(bound: Any, iface: Any) -> bool:
    """Does the bound type satisfy the interface?"""
    if bound is iface:
        return True
    if not isinstance(bound, type):
        return False
    try:
        return issubclass(bound, iface)
    except TypeError:
        # non-runtime_checkable protocol, or one with data members
        pass
    if not is_protocol(iface):
        return False
    return all(_declares(bound, name) for name in _protocol_members(iface))
