from .materializer import DependencyGraphMaterializer, GraphSnapshot
from .tree import ComponentTree, ResolverState

__all__ = [
    "ComponentTree",
    "DependencyGraphMaterializer",
    "GraphSnapshot",
    "ResolverState",
]
