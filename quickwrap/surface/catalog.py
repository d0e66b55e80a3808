"""
Type catalog loading.

A type catalog is the statically declared description of one or more types:
their constructors, methods, properties, events and, for delegates, their
invocation signature. It is produced ahead of time by an extraction step for
the target platform and stands in for runtime reflection.

Type references inside the catalog are kept as strings in reflection full-name
syntax (``System.Collections.Generic.Dictionary`2[System.String, System.Int32]``);
resolving them into TypeRef objects is SurfaceModelBuilder's job.

Example:
    >>> catalog = load_catalog("surface.yaml")
    >>> raw_type = catalog.resolve("System.Net.Http.HttpClient")
    >>> len(raw_type.methods)
    42
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

from ..errors import CatalogError, UnresolvableTypeError

logger = logging.getLogger(__name__)

VISIBILITIES = frozenset(
    {"public", "protected", "internal", "private", "protected internal", "private protected"}
)
TYPE_KINDS = frozenset({"class", "struct", "interface", "delegate", "static"})


@dataclass
class RawParameter:
    name: str
    type: str
    has_default: bool = False
    default: Any = None


@dataclass
class RawGenericParameter:
    name: str
    constraints: List[str] = field(default_factory=list)


@dataclass
class RawMethod:
    name: str
    declaring_type: str
    return_type: str = "System.Void"
    visibility: str = "public"
    is_static: bool = False
    is_special_name: bool = False
    parameters: List[RawParameter] = field(default_factory=list)
    generic_parameters: List[RawGenericParameter] = field(default_factory=list)


@dataclass
class RawProperty:
    name: str
    declaring_type: str
    type: str
    get_visibility: Optional[str] = None
    set_visibility: Optional[str] = None
    is_static: bool = False
    is_special_name: bool = False
    index_parameters: List[RawParameter] = field(default_factory=list)

    @property
    def has_public_getter(self) -> bool:
        return self.get_visibility == "public"

    @property
    def has_public_setter(self) -> bool:
        return self.set_visibility == "public"


@dataclass
class RawEvent:
    name: str
    declaring_type: str
    type: str
    visibility: str = "public"
    is_static: bool = False
    is_special_name: bool = False


@dataclass
class RawConstructor:
    visibility: str = "public"
    parameters: List[RawParameter] = field(default_factory=list)


@dataclass
class RawInvokeSignature:
    """Invocation signature of a delegate type."""

    parameters: List[RawParameter] = field(default_factory=list)
    return_type: str = "System.Void"


@dataclass
class RawType:
    name: str
    namespace: Optional[str] = None
    kind: str = "class"
    generic_parameters: List[str] = field(default_factory=list)
    constructors: Optional[List[RawConstructor]] = None
    methods: List[RawMethod] = field(default_factory=list)
    properties: List[RawProperty] = field(default_factory=list)
    events: List[RawEvent] = field(default_factory=list)
    invoke: Optional[RawInvokeSignature] = None

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def has_public_parameterless_constructor(self) -> bool:
        if self.kind in {"static", "interface", "delegate"}:
            return False
        if self.constructors is None:
            # No declared constructors: the compiler supplies a public default one.
            return True
        if self.kind == "struct":
            return True
        return any(
            ctor.visibility == "public" and not ctor.parameters for ctor in self.constructors
        )


class TypeCatalog:
    """Lookup table of raw types keyed by full name."""

    def __init__(self, types: Iterable[RawType] = ()):
        self._types: Dict[str, RawType] = {}
        for raw_type in types:
            if raw_type.full_name in self._types:
                raise CatalogError(f"Type declared twice: {raw_type.full_name}")
            self._types[raw_type.full_name] = raw_type

    def __contains__(self, full_name: str) -> bool:
        return full_name in self._types

    def __iter__(self) -> Iterator[RawType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def find(self, full_name: str) -> Optional[RawType]:
        return self._types.get(full_name)

    def resolve(self, full_name: str) -> RawType:
        """Return the raw type or raise UnresolvableTypeError."""
        raw_type = self._types.get(full_name)
        if raw_type is None:
            raise UnresolvableTypeError(full_name, "not present in the type catalog")
        return raw_type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeCatalog":
        if not isinstance(data, dict) or not isinstance(data.get("types"), list):
            raise CatalogError("Type catalog must be a mapping with a 'types' list")
        return cls(_parse_type(entry, index) for index, entry in enumerate(data["types"]))


def load_catalog(path: str) -> TypeCatalog:
    """Load a type catalog from a YAML or JSON file."""
    if not os.path.exists(path):
        raise CatalogError(f"Type catalog not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Invalid type catalog format in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogError(f"Type catalog {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read type catalog {path}: {e}") from e

    catalog = TypeCatalog.from_dict(data)
    logger.debug(f"Loaded {len(catalog)} types from {path}")
    return catalog


# ---------- entry parsing ----------


def _mapping(entry: Any, where: str) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise CatalogError(f"{where}: expected a mapping, got {type(entry).__name__}")
    return entry


def _require(entry: Dict[str, Any], key: str, where: str) -> Any:
    value = _mapping(entry, where).get(key)
    if value is None or value == "":
        raise CatalogError(f"{where}: missing required key '{key}'")
    return value


def _visibility(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip().lower()
    if value not in VISIBILITIES:
        raise CatalogError(f"{where}: unknown visibility '{value}'")
    return value


def _parse_parameters(entries: Optional[List[Any]], where: str) -> List[RawParameter]:
    parameters = []
    for index, entry in enumerate(entries or []):
        item_where = f"{where}.parameters[{index}]"
        parameters.append(
            RawParameter(
                name=str(_require(entry, "name", item_where)),
                type=str(_require(entry, "type", item_where)),
                has_default="default" in entry,
                default=entry.get("default"),
            )
        )
    return parameters


def _parse_generic_parameters(entries: Optional[List[Any]], where: str) -> List[RawGenericParameter]:
    result = []
    for index, entry in enumerate(entries or []):
        if isinstance(entry, str):
            result.append(RawGenericParameter(name=entry))
            continue
        item_where = f"{where}.generic_parameters[{index}]"
        result.append(
            RawGenericParameter(
                name=str(_require(entry, "name", item_where)),
                constraints=[str(c) for c in entry.get("constraints") or []],
            )
        )
    return result


def _parse_constructor(entry: Any, where: str) -> RawConstructor:
    entry = _mapping(entry, where)
    return RawConstructor(
        visibility=_visibility(entry.get("visibility", "public"), where),
        parameters=_parse_parameters(entry.get("parameters"), where),
    )


def _parse_method(entry: Dict[str, Any], owner: str, where: str) -> RawMethod:
    return RawMethod(
        name=str(_require(entry, "name", where)),
        declaring_type=str(entry.get("declaring_type") or owner),
        return_type=str(entry.get("return_type") or "System.Void"),
        visibility=_visibility(entry.get("visibility", "public"), where),
        is_static=bool(entry.get("static", False)),
        is_special_name=bool(entry.get("special_name", False)),
        parameters=_parse_parameters(entry.get("parameters"), where),
        generic_parameters=_parse_generic_parameters(entry.get("generic_parameters"), where),
    )


def _parse_property(entry: Dict[str, Any], owner: str, where: str) -> RawProperty:
    return RawProperty(
        name=str(_require(entry, "name", where)),
        declaring_type=str(entry.get("declaring_type") or owner),
        type=str(_require(entry, "type", where)),
        get_visibility=_visibility(entry.get("get"), where),
        set_visibility=_visibility(entry.get("set"), where),
        is_static=bool(entry.get("static", False)),
        is_special_name=bool(entry.get("special_name", False)),
        index_parameters=_parse_parameters(entry.get("index_parameters"), where),
    )


def _parse_event(entry: Dict[str, Any], owner: str, where: str) -> RawEvent:
    return RawEvent(
        name=str(_require(entry, "name", where)),
        declaring_type=str(entry.get("declaring_type") or owner),
        type=str(_require(entry, "type", where)),
        visibility=_visibility(entry.get("visibility", "public"), where),
        is_static=bool(entry.get("static", False)),
        is_special_name=bool(entry.get("special_name", False)),
    )


def _parse_type(entry: Dict[str, Any], index: int) -> RawType:
    where = f"types[{index}]"
    name = str(_require(entry, "name", where))
    namespace = entry.get("namespace") or None
    kind = str(entry.get("kind", "class")).lower()
    if kind not in TYPE_KINDS:
        raise CatalogError(f"{where}: unknown type kind '{kind}'")

    raw_type = RawType(
        name=name,
        namespace=namespace,
        kind=kind,
        generic_parameters=[str(p) for p in entry.get("generic_parameters") or []],
    )
    owner = raw_type.full_name
    where = f"{where} ({owner})"

    if "constructors" in entry:
        raw_type.constructors = [
            _parse_constructor(ctor, f"{where}.constructors[{i}]")
            for i, ctor in enumerate(entry.get("constructors") or [])
        ]

    raw_type.methods = [
        _parse_method(item, owner, f"{where}.methods[{i}]")
        for i, item in enumerate(entry.get("methods") or [])
    ]
    raw_type.properties = [
        _parse_property(item, owner, f"{where}.properties[{i}]")
        for i, item in enumerate(entry.get("properties") or [])
    ]
    raw_type.events = [
        _parse_event(item, owner, f"{where}.events[{i}]")
        for i, item in enumerate(entry.get("events") or [])
    ]

    if kind == "delegate":
        invoke = _mapping(entry.get("invoke") or {}, f"{where}.invoke")
        raw_type.invoke = RawInvokeSignature(
            parameters=_parse_parameters(invoke.get("parameters"), f"{where}.invoke"),
            return_type=str(invoke.get("return_type") or "System.Void"),
        )

    return raw_type
