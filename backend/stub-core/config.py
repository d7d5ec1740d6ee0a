from __future__ import annotations

import os

from dotenv import load_dotenv  # type: ignore

load_dotenv()

# Namespace prefix for the generated internal helpers, e.g. "MyLib.Internal".
# Empty -> generated code uses unqualified helper names.
INTERNAL_NAMESPACE = os.getenv("STUBGEN_INTERNAL_NAMESPACE", "").strip()

# Interfaces declared outside any namespace land in f"{NAMESPACE_PREFIX}{suffix}"
NAMESPACE_PREFIX = (os.getenv("STUBGEN_NAMESPACE_PREFIX") or "").strip() or "AutoGenerated"

# Request-dispatch markers, each accepted bare and with MARKER_SUFFIX
_DEFAULT_VERBS = "Get,Head,Post,Put,Delete,Patch,Options"
DISPATCH_VERBS = tuple(
    v.strip()
    for v in (os.getenv("STUBGEN_DISPATCH_VERBS") or _DEFAULT_VERBS).split(",")
    if v.strip()
)
MARKER_SUFFIX = "Attribute"

# Usings the rendered template already imports
DEFAULT_USINGS = frozenset({
    "System",
    "System.Net.Http",
    "System.Collections.Generic",
    "System.Linq",
})

LOG_LEVEL = (os.getenv("STUBGEN_LOG_LEVEL") or "").strip().upper() or "INFO"
