"""Package manifest (``package.json``) patching.

The patch is a pure ``dict -> dict`` transform so it can be tested without a
file system, and so re-applying it yields the same document.
"""

from __future__ import annotations

import json
from typing import Any

ENTRY_POINT = "dist/server.js"

# Run-mode scripts injected into the backend manifest, in insertion order.
RUN_SCRIPTS: dict[str, str] = {
    "watch": "tsc --watch",
    "start": f"tsc && node {ENTRY_POINT}",
    "dev": f"tsc && nodemon {ENTRY_POINT}",
}


def patch_backend_manifest(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *data* with the compiled entry point and run scripts.

    Existing values for ``main`` and for the three script keys are
    overwritten; every other key, and the order of existing keys, is kept.
    """
    patched = dict(data)
    patched["main"] = ENTRY_POINT

    scripts = patched.get("scripts")
    scripts = dict(scripts) if isinstance(scripts, dict) else {}
    scripts.update(RUN_SCRIPTS)
    patched["scripts"] = scripts
    return patched


def parse_manifest(text: str) -> dict[str, Any]:
    """Parse manifest text, rejecting anything but a JSON object."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("manifest root must be a JSON object")
    return data


def dump_manifest(data: dict[str, Any]) -> str:
    """Serialise a manifest with tab indentation."""
    return json.dumps(data, indent="\t", ensure_ascii=False)
