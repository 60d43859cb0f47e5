"""Common literal values used across protojsx.

These constants keep default file locations and JSX emission policy
centralized so the CLI, renderers, and tests import the same values without
drifting. Intended for internal use within the protojsx package.

Examples
--------
>>> from protojsx import _constants
>>> "img" in _constants.VOID_TAGS
True
>>> str(_constants.DEFAULT_INDEX)
'proto/index.yaml'
"""

import re
from pathlib import Path

ENV_PREFIX = "PROTOJSX_"

DEFAULT_INDEX = Path("proto/index.yaml")
DEFAULT_COMPONENTS = Path("proto/components.yaml")
DEFAULT_ASSETS = Path("proto/assets.yaml")
DEFAULT_OUTPUT_DIR = Path("src")
DEFAULT_ROUTER_MODULE = Path("router/index.jsx")
DEFAULT_IMPORT_PREFIX = "../"

# HTML elements that never carry children and may self-close when empty.
VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Names the router module binds itself; view identifiers must not reuse them.
ROUTER_BINDINGS = frozenset({"Router", "useRoutes"})

# Bindings introduced by generated imports must match this.
JS_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

REMOTE_SCHEMES = ("http://", "https://")

BASE_INDENT = 4
INDENT_STEP = 2
