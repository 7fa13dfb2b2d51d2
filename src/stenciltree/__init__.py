"""
stenciltree - Stencil component dependency explorer.

Finds a project's Stencil `docs.json` manifest (directly, or through the
`docs-json` output target in `stencil.config.ts`) and serves its components
as a lazily expandable dependency tree for editor side panels.

Key Components:
- core: Data types, path probes and the manifest path resolver
- parsing: Structural reading of stencil.config.ts
- graph: Manifest loading and on-demand node expansion

Usage:
    from stenciltree import ComponentTree

    tree = ComponentTree("./my-components")
    roots = tree.get_children()
"""

__version__ = "0.1.0"

from .core.types import ComponentRecord, Failure, FailureReason, Manifest, Node
from .graph.tree import ComponentTree

__all__ = [
    "__version__",
    "ComponentRecord",
    "ComponentTree",
    "Failure",
    "FailureReason",
    "Manifest",
    "Node",
]
