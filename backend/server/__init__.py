from __future__ import annotations

from importlib import import_module

__all__ = ["GameSession", "Settings", "create_app"]

_LAZY = {
    "create_app": ".app",
    "GameSession": ".session",
    "Settings": ".config",
}


def __getattr__(name: str):
    if name in _LAZY:
        module = import_module(_LAZY[name], __name__)
        return getattr(module, name)
    raise AttributeError(name)
