"""
Storefront Composer Kernel: Builder Actions

Structural validation and construction of builder actions.
Validation is structural (well-formed?) not semantic (will it apply?).
The builder reducer handles semantic checks (does the component exist?).
"""

from __future__ import annotations

from typing import Any

from composer.kernel import registry
from composer.kernel.types import (
    ACTION_TYPES,
    MOVE_DIRECTIONS,
    PANELS,
    PREVIEW_MODES,
    Action,
    new_component_id,
    now_iso,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_action(type: str, payload: Any) -> list[str]:
    """
    Validate an action's type and payload structure.
    Returns a list of error strings. Empty list = valid.
    """
    errors: list[str] = []

    if type not in ACTION_TYPES:
        errors.append(f"Unknown action type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


def make_action(
    type: str,
    payload: dict[str, Any] | None = None,
    *,
    sequence: int = 0,
    timestamp: str | None = None,
) -> Action:
    """
    Build an Action. Ids for new components are assigned here so that
    replaying a recorded action list yields the same component ids.
    """
    body = dict(payload or {})
    if type == "component.add" and not body.get("id"):
        body["id"] = new_component_id()
    if type == "component.duplicate" and not body.get("new_id"):
        body["new_id"] = new_component_id()
    return Action(type=type, payload=body, sequence=sequence, timestamp=timestamp or now_iso())


# ---------------------------------------------------------------------------
# Per-action validators
# ---------------------------------------------------------------------------


def _require_id(p: dict, action: str) -> list[str]:
    comp_id = p.get("id")
    if not isinstance(comp_id, str) or not comp_id:
        return [f"{action} requires 'id'"]
    return []


def _optional_id(p: dict, action: str) -> list[str]:
    comp_id = p.get("id")
    if comp_id is not None and (not isinstance(comp_id, str) or not comp_id):
        return [f"{action} 'id' must be a string or null"]
    return []


def _validate_add(p: dict) -> list[str]:
    errors: list[str] = []
    comp_type = p.get("type")
    if not comp_type:
        errors.append("component.add requires 'type'")
    elif not registry.is_registered(comp_type):
        errors.append(f"Unknown component type: {comp_type}")
    if "props" in p and p["props"] is not None and not isinstance(p["props"], dict):
        errors.append("component.add 'props' must be an object")
    return errors


def _validate_update(p: dict) -> list[str]:
    errors = _require_id(p, "component.update")
    if not isinstance(p.get("props"), dict):
        errors.append("component.update requires 'props' object")
    return errors


def _validate_move(p: dict) -> list[str]:
    errors = _require_id(p, "component.move")
    if p.get("direction") not in MOVE_DIRECTIONS:
        errors.append(f"component.move 'direction' must be one of: {', '.join(sorted(MOVE_DIRECTIONS))}")
    return errors


def _validate_panel(p: dict) -> list[str]:
    if p.get("panel") not in PANELS:
        return [f"panel.set 'panel' must be one of: {', '.join(sorted(PANELS))}"]
    return []


def _validate_preview(p: dict) -> list[str]:
    if p.get("mode") not in PREVIEW_MODES:
        return [f"preview.set 'mode' must be one of: {', '.join(sorted(PREVIEW_MODES))}"]
    return []


_VALIDATORS = {
    "component.add": _validate_add,
    "component.update": _validate_update,
    "component.remove": lambda p: _require_id(p, "component.remove"),
    "component.move": _validate_move,
    "component.duplicate": lambda p: _require_id(p, "component.duplicate"),
    "component.select": lambda p: _optional_id(p, "component.select"),
    "component.edit": lambda p: _optional_id(p, "component.edit"),
    "panel.set": _validate_panel,
    "preview.set": _validate_preview,
}
