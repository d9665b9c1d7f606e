from dataclasses import dataclass, field
from typing import Annotated, ClassVar, Optional

import pytest

from domain import Config, English, FileHandle, Greeter, Missing
from inject_kernel import Inject, Injector, ResolutionError
from inject_kernel.config import InjectSettings


@dataclass
class Pair:
    injected: Annotated[Config, Inject] = None
    plain: Config = None


@dataclass
class Handler:
    greeter: Annotated[Greeter, Inject("primary")] = None
    config: Annotated[Config, "inject"] = None
    handle: FileHandle = field(default=None, metadata={"inject": True})
    skipped: FileHandle = field(default=None, metadata={"inject": ""})
    cache: Annotated[Optional[FileHandle], Inject()] = None


@dataclass
class NeedsMissing:
    config: Annotated[Config, Inject] = None
    missing: Annotated[Missing, Inject] = None


@dataclass
class Wired:
    by_class: Annotated[Config, Inject] = None
    by_string: Annotated[Config, "inject"] = None
    by_custom: Annotated[Config, "wire"] = None


@dataclass
class OnlyOptional:
    cache: Annotated[Optional[FileHandle], Inject] = None


@dataclass(frozen=True)
class Frozen:
    config: Annotated[Config, Inject] = None


class Plain:
    config: Annotated[Config, Inject]
    _hidden: Annotated[Config, Inject]
    shared: ClassVar[Config]
    label: str = "plain"


def test_only_marked_field_is_populated(injector) -> None:
    cfg = Config()
    injector.map(cfg)
    pair = Pair()

    assert injector.apply(pair) is pair
    assert pair.injected is cfg
    assert pair.plain is None


def test_marker_forms(injector) -> None:
    en, cfg, fh = English(), Config(), FileHandle()
    injector.map(en).map(cfg).map(fh)
    h = injector.apply(Handler())

    assert h.greeter is en
    assert h.config is cfg
    assert h.handle is fh
    assert h.skipped is None
    assert h.cache is fh


def test_optional_miss_keeps_existing_value(injector) -> None:
    record = OnlyOptional()
    injector.apply(record)
    assert record.cache is None

    fh = FileHandle()
    injector.map(fh)
    injector.apply(record)
    assert record.cache is fh


def test_missing_dependency_raises_and_assigns_nothing(injector) -> None:
    injector.map(Config())
    record = NeedsMissing()

    with pytest.raises(ResolutionError) as exc_info:
        injector.apply(record)

    assert exc_info.value.type_ is Missing
    assert exc_info.value.target == "NeedsMissing.missing"
    assert "NeedsMissing.missing" in str(exc_info.value)
    assert record.config is None


def test_plain_annotated_class(injector) -> None:
    cfg = Config()
    injector.map(cfg)
    obj = injector.apply(Plain())

    assert obj.config is cfg
    assert not hasattr(obj, "_hidden")
    assert obj.label == "plain"


def test_fields_resolve_through_parent(injector, child_injector) -> None:
    cfg = Config()
    injector.map(cfg)
    pair = child_injector.apply(Pair())
    assert pair.injected is cfg


@pytest.mark.parametrize("value", [None, 5, "text", Config(), Config, [1, 2]])
def test_non_records_are_noop(injector, value) -> None:
    assert injector.apply(value) is value


def test_frozen_record_is_noop(injector) -> None:
    injector.map(Config())
    record = Frozen()
    assert injector.apply(record) is record
    assert record.config is None


def test_custom_marker_spelling() -> None:
    inj = Injector(settings=InjectSettings(_env_file=None, marker="wire"))
    cfg = Config()
    inj.map(cfg)
    record = inj.apply(Wired())

    assert record.by_class is cfg
    assert record.by_custom is cfg
    assert record.by_string is None
