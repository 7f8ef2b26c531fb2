from shopify_sync.ui.components.empty_state import EmptyStateWidget, LoadingStateWidget

__all__ = ["EmptyStateWidget", "LoadingStateWidget"]
