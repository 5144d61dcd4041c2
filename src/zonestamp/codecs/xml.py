"""Markup codec: timestamps as XML element text and attribute values."""

from datetime import tzinfo
from xml.etree.ElementTree import Element

from zonestamp.config.settings import UTC_POLICY, ZonePolicy
from zonestamp.timestamp import Timestamp


def encode_element_custom(
    ts: Timestamp,
    tag: str,
    zone: tzinfo | str | None,
    layout: str,
) -> Element:
    """Build an element whose text is ts rendered in zone with layout."""
    text = ts.encode(zone, layout)
    element = Element(tag)
    element.text = text
    return element


def encode_element(
    ts: Timestamp,
    tag: str,
    policy: ZonePolicy = UTC_POLICY,
) -> Element:
    """
    Build an element holding ts in the policy's output zone.

    Args:
        ts: Timestamp to encode.
        tag: Element tag.
        policy: Output zone and layout.

    Returns:
        New element.
    """
    return encode_element_custom(ts, tag, policy.output_tz, policy.layout)


def encode_attribute_custom(
    ts: Timestamp,
    element: Element,
    name: str,
    zone: tzinfo | str | None,
    layout: str,
) -> None:
    """Set attribute name on element to ts rendered in zone with layout."""
    element.set(name, ts.encode(zone, layout))


def encode_attribute(
    ts: Timestamp,
    element: Element,
    name: str,
    policy: ZonePolicy = UTC_POLICY,
) -> None:
    """Set attribute name on element to ts in the policy's output zone."""
    encode_attribute_custom(ts, element, name, policy.output_tz, policy.layout)


def decode_element_custom(element: Element, zone: tzinfo | str | None) -> Timestamp:
    """Parse the element text with zone as the default zone."""
    return Timestamp.from_string(element.text or "", zone)


def decode_element(element: Element, policy: ZonePolicy = UTC_POLICY) -> Timestamp:
    """
    Parse the element text with the policy's input zone.

    An element without text decodes to the zero-instant.
    """
    return decode_element_custom(element, policy.input_tz)


def decode_attribute_custom(
    element: Element,
    name: str,
    zone: tzinfo | str | None,
) -> Timestamp:
    """Parse attribute name with zone as the default zone."""
    return Timestamp.from_string(element.get(name, ""), zone)


def decode_attribute(
    element: Element,
    name: str,
    policy: ZonePolicy = UTC_POLICY,
) -> Timestamp:
    """Parse attribute name with the policy's input zone."""
    return decode_attribute_custom(element, name, policy.input_tz)
