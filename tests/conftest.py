"""
Shared fixtures.

``generated`` writes a tuple family into a fresh package under tmp_path and
imports both modules, so tests can exercise the generated classes directly.
"""

import importlib
import itertools
import logging
import sys
from types import SimpleNamespace

import pytest

from tuplegen.config import GeneratorConfig
from tuplegen.pipeline import generate

_package_ids = itertools.count()


@pytest.fixture
def generated(tmp_path):
    """Factory fixture: ``generated(max_arity, **config_overrides)``."""
    roots = []
    names = []

    def factory(max_arity: int = 4, **overrides) -> SimpleNamespace:
        name = f"generated_tuples_{next(_package_ids)}"
        root = tmp_path / name
        package = root / name
        config = GeneratorConfig(output_dir=package, max_arity=max_arity, **overrides)
        result = generate(config)
        (package / "__init__.py").write_text("", encoding="utf-8")

        sys.path.insert(0, str(root))
        roots.append(str(root))
        names.append(name)
        importlib.invalidate_caches()

        return SimpleNamespace(
            config=config,
            result=result,
            family=result.family,
            tuples=importlib.import_module(f"{name}.{config.interfaces_module}"),
            impl=importlib.import_module(f"{name}.{config.implementations_module}"),
        )

    yield factory

    for root in roots:
        if root in sys.path:
            sys.path.remove(root)
    for name in names:
        for module in [m for m in sys.modules if m == name or m.startswith(f"{name}.")]:
            del sys.modules[module]


@pytest.fixture(autouse=True)
def reset_tuplegen_logger():
    """setup_logging() detaches the package logger from root; undo that per test."""
    yield
    logger = logging.getLogger("tuplegen")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
