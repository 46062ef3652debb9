"""
Load the module a CLI command operates on.
"""

import importlib
import importlib.util
import sys
import types
from dataclasses import replace
from pathlib import Path

from ..config import GenerationConfig


def load_target(target: str) -> types.ModuleType:
    """
    Import a module by dotted name, or from a path to a .py file.

    Raises:
        FileNotFoundError: If target is a .py path that does not exist
        ImportError: If the module cannot be imported
    """
    if target.endswith(".py"):
        path = Path(target).resolve()
        if not path.is_file():
            raise FileNotFoundError(target)
        name = path.stem
        spec = importlib.util.spec_from_file_location(name, str(path))
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load {target}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(target)


def load_config(allow_implicit: bool = False) -> GenerationConfig:
    """Config from the environment, with CLI flags applied on top."""
    config = GenerationConfig.from_env()
    if allow_implicit:
        config = replace(config, require_action_creators=False)
    return config
