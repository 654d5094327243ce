"""
Deterministic YAML rendering for pipeline records.

Records are dataclasses whose fields may carry ``yaml_field`` metadata:

- ``order``: sort key for the field in the output mapping (fields without
  one keep their declaration order, after ordered fields with lower keys)
- ``alias``: the key to emit instead of the camelCase field name
- ``literal``: render the string as a ``|`` block scalar

``None`` values, empty collections and values equal to the field default are
left out, so a record only carries what it changes.
"""

import dataclasses
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

DEFAULT_ORDER = 100


class LiteralString(str):
    """A string that is always emitted as a literal block scalar."""


def yaml_field(
    *,
    order: int = DEFAULT_ORDER,
    alias: Optional[str] = None,
    literal: bool = False,
    **kwargs: Any,
):
    """Declare a dataclass field with YAML rendering metadata."""
    metadata = dict(kwargs.pop("metadata", {}))
    metadata.update({"yaml_order": order, "yaml_alias": alias, "yaml_literal": literal})
    return dataclasses.field(metadata=metadata, **kwargs)


def camel_case(name: str) -> str:
    """Convert snake_case to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _field_default(f: dataclasses.Field) -> Any:
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
        return f.default_factory()  # type: ignore[misc]
    return dataclasses.MISSING


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (dict, list, tuple)) and not value:
        return True
    return False


def _record_items(record: Any) -> List[Tuple[str, Any]]:
    ordered = []
    for index, f in enumerate(dataclasses.fields(record)):
        if f.name.startswith("_"):
            continue
        value = getattr(record, f.name)
        if _is_empty(value):
            continue
        default = _field_default(f)
        if default is not dataclasses.MISSING and value == default:
            continue
        key = f.metadata.get("yaml_alias") or camel_case(f.name)
        if f.metadata.get("yaml_literal") and isinstance(value, str):
            value = LiteralString(value)
        ordered.append((f.metadata.get("yaml_order", DEFAULT_ORDER), index, key, value))
    ordered.sort(key=lambda item: (item[0], item[1]))
    return [(key, value) for _, _, key, value in ordered]


def to_yaml_data(obj: Any) -> Any:
    """
    Convert records, mappings and sequences into plain YAML-ready data.

    Mapping order is preserved. Objects exposing ``to_yaml_data()`` are asked
    to convert themselves.
    """
    if hasattr(obj, "to_yaml_data") and not isinstance(obj, type):
        return to_yaml_data(obj.to_yaml_data())
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {key: to_yaml_data(value) for key, value in _record_items(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return {str(key): to_yaml_data(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_yaml_data(item) for item in obj]
    return obj


class _Dumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors and indents nested sequences."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if isinstance(data, LiteralString) or "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_Dumper.add_representer(str, _represent_str)
_Dumper.add_representer(LiteralString, _represent_str)


def render_yaml(data: Any) -> str:
    """Render data to a YAML document string."""
    return yaml.dump(
        to_yaml_data(data),
        Dumper=_Dumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )

