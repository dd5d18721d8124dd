"""
Tagged property values from the UDisks2 object graph.

D-Bus variants arrive as ``(signature, value)`` pairs. Each decoder checks the
signature it expects and either returns a plain Python value or raises
PropertyDecodeError. A decode failure is always local to one property.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from ...core.exceptions import PropertyDecodeError


@dataclass(frozen=True)
class PropertyValue:
    signature: str
    value: Any

    @classmethod
    def from_variant(cls, variant: Any) -> "PropertyValue":
        """Wrap a raw ``(signature, value)`` variant as returned by jeepney."""
        if isinstance(variant, tuple) and len(variant) == 2 and isinstance(variant[0], str):
            return cls(signature=variant[0], value=variant[1])
        return cls(signature="", value=variant)


# object path -> interface name -> property name -> value
PropertyMap = Dict[str, PropertyValue]
InterfaceMap = Dict[str, PropertyMap]
ManagedObjects = Dict[str, InterfaceMap]


def strip_nul(raw: bytes) -> bytes:
    """Remove exactly one trailing NUL byte, if present."""
    if raw.endswith(b"\x00"):
        return raw[:-1]
    return raw


def _as_bytes(name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    # Some bindings hand byte arrays over as lists of ints
    if isinstance(value, (list, tuple)) and all(
        isinstance(b, int) and 0 <= b <= 255 for b in value
    ):
        return bytes(value)
    raise PropertyDecodeError(name, "byte string", f"got {type(value).__name__}")


def _utf8(name: str, raw: bytes) -> str:
    try:
        return strip_nul(raw).decode("utf-8")
    except UnicodeDecodeError as e:
        raise PropertyDecodeError(name, "byte string", f"invalid UTF-8 ({e.reason})")


def decode_byte_string(name: str, prop: PropertyValue) -> str:
    if prop.signature not in ("ay", ""):
        raise PropertyDecodeError(name, "byte string", f"signature {prop.signature!r}")
    return _utf8(name, _as_bytes(name, prop.value))


def decode_byte_string_array(name: str, prop: PropertyValue) -> List[str]:
    """
    Decode an ``aay`` property element by element.

    Elements that are not valid UTF-8 are dropped; the rest are kept.
    """
    if prop.signature not in ("aay", "") or not isinstance(prop.value, (list, tuple)):
        raise PropertyDecodeError(name, "byte string array", f"signature {prop.signature!r}")

    decoded = []
    for item in prop.value:
        try:
            decoded.append(_utf8(name, _as_bytes(name, item)))
        except PropertyDecodeError:
            continue
    return decoded


def decode_string(name: str, prop: PropertyValue) -> str:
    if prop.signature not in ("s", "o", "g", "") or not isinstance(prop.value, str):
        raise PropertyDecodeError(name, "string", f"signature {prop.signature!r}")
    return prop.value


def decode_bool(name: str, prop: PropertyValue) -> bool:
    if prop.signature not in ("b", "") or not isinstance(prop.value, bool):
        raise PropertyDecodeError(name, "boolean", f"signature {prop.signature!r}")
    return prop.value


def decode_object_path(name: str, prop: PropertyValue) -> str:
    if prop.signature not in ("o", "") or not isinstance(prop.value, str):
        raise PropertyDecodeError(name, "object path", f"signature {prop.signature!r}")
    if not prop.value.startswith("/"):
        raise PropertyDecodeError(name, "object path", f"{prop.value!r} is not absolute")
    return prop.value
