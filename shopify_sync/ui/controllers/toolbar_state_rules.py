from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from shopify_sync.domain.sync_state import SyncState

TAB_COLLECTIONS = "collections"
TAB_PRODUCTS = "products"


@dataclass(frozen=True)
class ToolbarInput:
    """Señales necesarias para decidir el estado de la barra de herramientas."""

    connected: bool
    connecting: bool
    loading: bool
    collections_count: int
    products_count: int
    active_tab: str

    @classmethod
    def from_state(cls, state: SyncState, active_tab: str) -> "ToolbarInput":
        return cls(
            connected=state.is_connected,
            connecting=state.is_connecting,
            loading=state.is_loading,
            collections_count=len(state.collections),
            products_count=len(state.products),
            active_tab=active_tab,
        )


@dataclass(frozen=True)
class ButtonDecision:
    """Decisión inmutable para aplicar a un botón sin depender de Qt."""

    enabled: bool
    text: str
    tooltip: str | None
    reason_code: str


@dataclass(frozen=True)
class ToolbarDecision:
    connect: ButtonDecision
    export: ButtonDecision
    refresh_products: ButtonDecision
    status_text: str
    status_tone: str
    summary_text: str


ReasonRule = tuple[Callable[[ToolbarInput], bool], str]


def _first_matching_reason(toolbar: ToolbarInput, rules: tuple[ReasonRule, ...], default: str) -> str:
    for predicate, reason_code in rules:
        if predicate(toolbar):
            return reason_code
    return default


def _exportable_rows(toolbar: ToolbarInput) -> int:
    if toolbar.active_tab == TAB_PRODUCTS:
        return toolbar.products_count
    return toolbar.collections_count


def _export_reason(toolbar: ToolbarInput) -> str:
    rules: tuple[ReasonRule, ...] = (
        (lambda t: not t.connected, "export_not_connected"),
        (lambda t: t.loading, "export_blocked_while_loading"),
        (lambda t: _exportable_rows(t) == 0, "export_no_rows"),
    )
    return _first_matching_reason(toolbar, rules, "export_ready")


def _summary_text(toolbar: ToolbarInput) -> str:
    if toolbar.loading:
        return "Loading..."
    if toolbar.collections_count:
        return f"{toolbar.collections_count} collections"
    return ""


def decide_toolbar_state(toolbar: ToolbarInput) -> ToolbarDecision:
    """Calcula botones y barra de estado a partir de una instantánea."""

    connect = ButtonDecision(
        enabled=not toolbar.loading,
        text="Refresh" if toolbar.connected else "Connect",
        tooltip="Reload collections from Shopify" if toolbar.connected else "Verify credentials and load collections",
        reason_code="connect_blocked_while_loading" if toolbar.loading else "connect_ready",
    )

    export_reason = _export_reason(toolbar)
    export = ButtonDecision(
        enabled=export_reason == "export_ready",
        text="Export Products" if toolbar.active_tab == TAB_PRODUCTS else "Export",
        tooltip=None,
        reason_code=export_reason,
    )

    refresh_enabled = toolbar.connected and not toolbar.loading
    refresh_products = ButtonDecision(
        enabled=refresh_enabled,
        text="Fetch Products",
        tooltip=None,
        reason_code="refresh_products_ready" if refresh_enabled else "refresh_products_blocked",
    )

    if toolbar.connecting:
        status_text, status_tone = "Connecting...", "pending"
    elif toolbar.connected:
        status_text, status_tone = "Connected to Shopify", "success"
    else:
        status_text, status_tone = "Not Connected", "error"

    return ToolbarDecision(
        connect=connect,
        export=export,
        refresh_products=refresh_products,
        status_text=status_text,
        status_tone=status_tone,
        summary_text=_summary_text(toolbar),
    )
