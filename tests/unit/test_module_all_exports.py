from __future__ import annotations

import importlib
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[2] / "src" / "ftx_rest_client"


def _module_names() -> list[str]:
    names: list[str] = []
    for path in sorted(PACKAGE_ROOT.rglob("*.py")):
        parts = path.relative_to(PACKAGE_ROOT.parent).with_suffix("").parts
        if parts[-1] == "__init__":
            parts = parts[:-1]
        names.append(".".join(parts))
    return names


@pytest.mark.parametrize("module_name", _module_names())
def test_module_all_lists_existing_unique_names(module_name: str) -> None:
    module = importlib.import_module(module_name)
    exported = getattr(module, "__all__", None)
    assert isinstance(exported, list), f"{module_name} does not define __all__"
    assert len(exported) == len(set(exported)), f"{module_name}.__all__ has duplicates"
    missing = [name for name in exported if not hasattr(module, name)]
    assert missing == []


def test_endpoint_modules_export_every_request_class() -> None:
    from ftx_rest_client.core.request import Request

    for module_name in _module_names():
        if ".endpoints." not in module_name:
            continue
        module = importlib.import_module(module_name)
        defined = {
            name
            for name, value in vars(module).items()
            if isinstance(value, type)
            and issubclass(value, Request)
            and value.__module__ == module_name
        }
        assert defined <= set(module.__all__), module_name
