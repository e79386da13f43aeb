"""Hook layer: event/filter registry and pluggy-based plugin loading."""

from restcore.hooks.registry import Channel, HookBinding, HookRegistry

__all__ = ["Channel", "HookBinding", "HookRegistry"]
