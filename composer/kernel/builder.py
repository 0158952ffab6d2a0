"""
Storefront Composer Kernel: Builder State Machine

Pure function: (BuilderState, Action) → ReduceResult
No side effects. No IO. Deterministic when actions carry their ids.

The builder is single-threaded and driven by user interaction:

    component.add        append, select it, open the edit panel
    component.update     full replace of one component's props
    component.remove     filter out, clear pointers that referenced it
    component.move       swap with the neighbour by array index, re-stamp order
    component.duplicate  clone with a fresh id directly after the source
    component.select     point the selection at a component (or clear it)
    component.edit       open the property editor for a component (or close it)
    panel.set            switch the side panel
    preview.set          switch desktop / mobile preview

Array position is the source of truth for order. Reads go through
ordered_components(), which re-derives order from position.
"""

from __future__ import annotations

import copy
from typing import Any

from composer.kernel import registry
from composer.kernel.types import (
    MOVE_DIRECTIONS,
    PANELS,
    PREVIEW_MODES,
    Action,
    BuilderState,
    PageComponent,
    ReduceResult,
    Warning,
    new_component_id,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_builder_state() -> BuilderState:
    return BuilderState()


def from_components(components: list[PageComponent]) -> BuilderState:
    """Seed a builder session from a loaded layout, sorted by order."""
    ordered = sorted(components, key=lambda c: c.order)
    return BuilderState(components=_restamp(copy.deepcopy(ordered)))


def reduce(state: BuilderState, action: Action) -> ReduceResult:
    """
    Apply one action to the current builder state.
    The input state is never modified. Never raises.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return ReduceResult(
            state=state,
            applied=False,
            error=f"UNKNOWN_ACTION: {action.type}",
        )
    if not isinstance(action.payload, dict):
        return ReduceResult(state=state, applied=False, error="INVALID_PAYLOAD: payload must be an object")

    # Deep copy so we never mutate the input
    st = copy.deepcopy(state)
    return handler(st, action.payload)


def replay(actions: list[Action], initial: BuilderState | None = None) -> BuilderState:
    """
    Rebuild builder state by reducing over all actions.
    Rejected actions are skipped.
    """
    state = initial if initial is not None else empty_builder_state()
    for action in actions:
        result = reduce(state, action)
        if result.applied:
            state = result.state
    return state


def ordered_components(state: BuilderState) -> list[PageComponent]:
    """Components in display order with order re-stamped from position."""
    return _restamp(copy.deepcopy(state.components))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(st: BuilderState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=st, applied=False, error=f"{code}: {msg}")


def _ok(st: BuilderState, warnings: list[Warning] | None = None) -> ReduceResult:
    return ReduceResult(state=st, applied=True, warnings=warnings or [])


def _restamp(components: list[PageComponent]) -> list[PageComponent]:
    for i, component in enumerate(components):
        component.order = i
    return components


def _index_of(st: BuilderState, component_id: Any) -> int:
    for i, component in enumerate(st.components):
        if component.id == component_id:
            return i
    return -1


# ---------------------------------------------------------------------------
# Component handlers
# ---------------------------------------------------------------------------


def _handle_add(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    comp_type = p.get("type")
    if not isinstance(comp_type, str) or not registry.is_registered(comp_type):
        return _reject(st, "UNKNOWN_COMPONENT_TYPE", f"'{comp_type}' is not in the registry")

    comp_id = p.get("id") or new_component_id()
    if _index_of(st, comp_id) >= 0:
        return _reject(st, "DUPLICATE_ID", f"component '{comp_id}' already exists")

    props = p.get("props")
    if props is None:
        props = registry.get_template(comp_type).new_props()
    elif not isinstance(props, dict):
        return _reject(st, "INVALID_PROPS", "props must be an object")

    st.components.append(
        PageComponent(id=comp_id, type=comp_type, props=copy.deepcopy(props), order=len(st.components))
    )
    st.selected_id = comp_id
    st.editing_id = comp_id
    st.active_panel = "edit"
    return _ok(st)


def _handle_update(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    idx = _index_of(st, p.get("id"))
    if idx < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{p.get('id')}' not found")

    props = p.get("props")
    if not isinstance(props, dict):
        return _reject(st, "INVALID_PROPS", "props must be an object")

    # Full replace. Callers merge a single-field edit before dispatching.
    st.components[idx].props = copy.deepcopy(props)
    return _ok(st)


def _handle_remove(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    comp_id = p.get("id")
    if _index_of(st, comp_id) < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{comp_id}' not found")

    st.components = [c for c in st.components if c.id != comp_id]
    if st.selected_id == comp_id:
        st.selected_id = None
    if st.editing_id == comp_id:
        st.editing_id = None
    return _ok(st)


def _handle_move(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    idx = _index_of(st, p.get("id"))
    if idx < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{p.get('id')}' not found")

    direction = p.get("direction")
    if direction not in MOVE_DIRECTIONS:
        return _reject(st, "INVALID_DIRECTION", f"direction must be one of {sorted(MOVE_DIRECTIONS)}")

    target = idx - 1 if direction == "up" else idx + 1
    if target < 0 or target >= len(st.components):
        return _ok(st, [Warning(code="MOVE_AT_EDGE", message=f"component '{p['id']}' cannot move {direction}")])

    st.components[idx], st.components[target] = st.components[target], st.components[idx]
    _restamp(st.components)
    return _ok(st)


def _handle_duplicate(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    idx = _index_of(st, p.get("id"))
    if idx < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{p.get('id')}' not found")

    new_id = p.get("new_id") or new_component_id()
    if _index_of(st, new_id) >= 0:
        return _reject(st, "DUPLICATE_ID", f"component '{new_id}' already exists")

    source = st.components[idx]
    clone = PageComponent(id=new_id, type=source.type, props=copy.deepcopy(source.props))
    st.components.insert(idx + 1, clone)
    _restamp(st.components)
    return _ok(st)


# ---------------------------------------------------------------------------
# Selection and panel handlers
# ---------------------------------------------------------------------------


def _handle_select(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    comp_id = p.get("id")
    if comp_id is not None and _index_of(st, comp_id) < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{comp_id}' not found")
    st.selected_id = comp_id
    return _ok(st)


def _handle_edit(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    comp_id = p.get("id")
    if comp_id is None:
        st.editing_id = None
        if st.active_panel == "edit":
            st.active_panel = "components"
        return _ok(st)

    if _index_of(st, comp_id) < 0:
        return _reject(st, "COMPONENT_NOT_FOUND", f"component '{comp_id}' not found")
    st.editing_id = comp_id
    st.selected_id = comp_id
    st.active_panel = "edit"
    return _ok(st)


def _handle_panel(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    panel = p.get("panel")
    if panel not in PANELS:
        return _reject(st, "INVALID_PANEL", f"panel must be one of {sorted(PANELS)}")
    st.active_panel = panel
    return _ok(st)


def _handle_preview(st: BuilderState, p: dict[str, Any]) -> ReduceResult:
    mode = p.get("mode")
    if mode not in PREVIEW_MODES:
        return _reject(st, "INVALID_PREVIEW_MODE", f"mode must be one of {sorted(PREVIEW_MODES)}")
    st.preview_mode = mode
    return _ok(st)


_HANDLERS = {
    "component.add": _handle_add,
    "component.update": _handle_update,
    "component.remove": _handle_remove,
    "component.move": _handle_move,
    "component.duplicate": _handle_duplicate,
    "component.select": _handle_select,
    "component.edit": _handle_edit,
    "panel.set": _handle_panel,
    "preview.set": _handle_preview,
}
