"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local proplint package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of proplint modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("proplint"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of the developer's global config and env."""
    import proplint.config.loader as loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml")
    for key in [k for k in os.environ if k.startswith("PROPLINT__")]:
        monkeypatch.delenv(key)


@pytest.fixture
def parse() -> Callable[..., Any]:
    """Parse a dedented snippet and return its program node."""
    from proplint.parsing import JsParser

    parser = JsParser()

    def _parse(source: str, language: str = "javascript") -> Any:
        return parser.parse_source(textwrap.dedent(source), language).root_node

    return _parse


@pytest.fixture
def find() -> Callable[..., Any]:
    """First node of a type, optionally with an exact text, in source order."""

    def _find(root: Any, node_type: str, text: str | None = None) -> Any:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == node_type and (text is None or node.text.decode("utf-8") == text):
                return node
            stack.extend(reversed(node.children))
        raise AssertionError(f"no {node_type} node{'' if text is None else f' {text!r}'} in tree")

    return _find
