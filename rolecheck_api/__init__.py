# rolecheck_api/__init__.py
import importlib
from typing import Any

__all__ = ["server", "schemas", "metrics"]


def __getattr__(name: str) -> Any:
    """
    Lazy import submodules on attribute access, e.g. `from rolecheck_api import server`.
    Importing the package alone does not build the demo app.
    """
    if name in __all__:
        mod = importlib.import_module(f"rolecheck_api.{name}")
        globals()[name] = mod
        return mod
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
