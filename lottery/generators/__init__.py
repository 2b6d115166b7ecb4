"""
Central player generator registry and registration decorator.
Use @register_generator("name") above a generator class to make it available to the CLI and scripts.
All generator modules in this directory are imported here so registration occurs.
"""

GENERATOR_MAP = {}


def register_generator(name):
    """
    Decorator to register a generator class under a given name.
    Usage:
        @register_generator("random")
        class RandomPlayerGenerator(PlayerGenerator): ...
    Raises:
        ValueError: If another generator already uses the name.
    """
    if name in GENERATOR_MAP:
        raise ValueError(f"Generator name already registered: {name}")

    def decorator(cls):
        GENERATOR_MAP[name] = cls
        return cls
    return decorator


# Automatically import all generator modules in this directory to ensure registration decorators run
import importlib
import os
import pkgutil

_this_dir = os.path.dirname(__file__)
_pkg_name = __name__
for _, modname, ispkg in pkgutil.iter_modules([_this_dir]):
    if not ispkg and modname not in ("__init__", "base"):
        importlib.import_module(f"{_pkg_name}.{modname}")
