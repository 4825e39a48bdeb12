"""enrichr package exports.

Keep package import lightweight by lazily importing heavy modules.
"""

from typing import TYPE_CHECKING, Any

__version__ = "0.4.0"
__author__ = "enrichr contributors"

if TYPE_CHECKING:
    from .config import AppConfig

__all__ = ["AppConfig", "create_store"]


def __getattr__(name: str) -> Any:
    """Lazily resolve top-level exports."""
    if name == "AppConfig":
        from .config import AppConfig

        return AppConfig

    if name == "create_store":
        from .storage import create_store

        return create_store

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
