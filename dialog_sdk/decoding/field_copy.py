"""Structural copy of decoded wire fields onto model instances.

Used by the tagged decoder when no custom factory exists for a type tag.
Slot resolution prefers a private backing attribute ("_name") over the public
field ("name"); fields without a matching slot are skipped.
"""

import logging
from typing import Any

from pydantic import BaseModel


def new_instance(cls: type | None) -> Any:
    """Create a blank instance of cls, or a plain dict when no class is registered."""
    if cls is None:
        return {}
    if issubclass(cls, BaseModel):
        return cls.model_construct()
    return cls()


def _resolve_slot(target: Any, name: str) -> str | None:
    private_name = f"_{name}"
    if isinstance(target, BaseModel):
        model_cls = type(target)
        if private_name in (model_cls.__private_attributes__ or {}):
            return private_name
        if name in model_cls.model_fields:
            return name
        return None
    if hasattr(target, private_name):
        return private_name
    if hasattr(target, name):
        return name
    return None


def assign_field(target: Any, name: str, value: Any, logger: logging.Logger, type_tag: str = "object") -> bool:
    """
    Assigns a decoded value to the matching slot of target.

    Args:
        target: The instance being filled (model instance, plain object or dict).
        name (str): The wire field name.
        value: The already decoded value.
        logger (logging.Logger): Receives a debug line for skipped fields and an error line for failed assignments.
        type_tag (str): The wire type of target, for log messages only.

    Returns:
        bool: True if the value was assigned.
    """
    if isinstance(target, dict):
        target[name] = value
        return True

    slot = _resolve_slot(target, name)
    if slot is None:
        logger.debug("No field '%s' on %s, skipping", name, type_tag)
        return False
    try:
        setattr(target, slot, value)
    except (AttributeError, TypeError, ValueError) as e:
        logger.error("Failed to set field '%s' on %s: %s", slot, type_tag, e)
        return False
    return True
