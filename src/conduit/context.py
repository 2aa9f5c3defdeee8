"""Process-wide collaborators shared by pages and the runtime."""

from dataclasses import dataclass, field

from conduit.api.client import ApiClient
from conduit.config import ConduitConfig
from conduit.constants import SLOW_LOAD_THRESHOLD
from conduit.history import History
from conduit.storage import ViewerStore


@dataclass
class AppContext:
    """External collaborators: network, viewer storage and history."""

    api: ApiClient
    store: ViewerStore
    history: History = field(default_factory=History)
    slow_threshold: float = SLOW_LOAD_THRESHOLD

    @classmethod
    def from_config(cls, config: ConduitConfig) -> "AppContext":
        return cls(
            api=ApiClient(base_url=config.api.base_url, timeout=config.api.timeout),
            store=ViewerStore(config.storage.viewer_path),
            slow_threshold=config.loading.slow_threshold,
        )


# Global context (set by cli.py or tests)
_ctx: AppContext | None = None


def get_context() -> AppContext:
    """Get the current application context.

    Builds one from default config if not yet initialized.
    """
    global _ctx
    if _ctx is None:
        _ctx = AppContext.from_config(ConduitConfig())
    return _ctx


def set_context(ctx: AppContext | None) -> None:
    """Set the global application context."""
    global _ctx
    _ctx = ctx
