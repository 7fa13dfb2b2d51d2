"""
Dependency Graph Materializer.

Builds the component dependency tree shown in the editor from a docs.json
manifest. Stencil records its graph as tag references in each component's
`dependencies`/`dependents` lists, so the graph may contain cycles and
references to components that are not in the manifest.

Nodes never point at each other. Expanding a node looks up its dependency
tags in a flat snapshot taken at load time, so a cyclic graph
(A -> B -> A) expands one level per call and never recurses. How deep to
expand is up to the host.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from pydantic import ValidationError

from ..config import Settings
from ..core import paths
from ..core.types import ComponentRecord, Failure, FailureReason, Manifest, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Root nodes from one load, with a tag index for child lookups.

    Attributes:
        roots: Nodes in manifest order.
        by_tag: First node for each tag.
        manifest_path: The manifest the snapshot was built from.
    """

    roots: Tuple[Node, ...] = ()
    by_tag: Dict[str, Node] = field(default_factory=dict)
    manifest_path: Optional[Path] = None


class DependencyGraphMaterializer:
    """
    Loads docs.json manifests and expands their nodes on demand.

    Only the most recent load is kept. A failed load leaves an empty
    snapshot and records `last_failure`.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._snapshot = GraphSnapshot()
        self._last_failure: Optional[Failure] = None

    @property
    def roots(self) -> List[Node]:
        return list(self._snapshot.roots)

    @property
    def manifest_path(self) -> Optional[Path]:
        return self._snapshot.manifest_path

    @property
    def last_failure(self) -> Optional[Failure]:
        return self._last_failure

    def load(self, path: Union[str, Path]) -> List[Node]:
        """
        Load a manifest and build its root nodes.

        Args:
            path: Location of the docs.json file.

        Returns:
            List[Node]: One node per component, or [] if the manifest
            could not be read.
        """
        path = Path(path)
        manifest = self._read_manifest(path)

        if manifest is None:
            self._snapshot = GraphSnapshot(manifest_path=path)
            return []

        known_tags: Set[str] = set(manifest.tags())
        roots = tuple(self._to_node(record, path, known_tags) for record in manifest.components)

        by_tag: Dict[str, Node] = {}
        for node in roots:
            by_tag.setdefault(node.tag, node)

        self._snapshot = GraphSnapshot(roots=roots, by_tag=by_tag, manifest_path=path)
        self._last_failure = None

        logger.info(f"Loaded {len(roots)} components from {path}")
        return list(roots)

    def get_children(self, node: Node) -> List[Node]:
        """
        Expand one level below `node`.

        Args:
            node: A node previously returned by `load` or `get_children`.

        Returns:
            List[Node]: Dependencies of `node` present in the current
            snapshot, in the order they are declared.
        """
        by_tag = self._snapshot.by_tag
        return [by_tag[tag] for tag in node.dependencies if tag in by_tag]

    def _read_manifest(self, path: Path) -> Optional[Manifest]:
        """Read and validate docs.json. Any problem makes the whole file unusable."""
        try:
            data = json.loads(path.read_text(encoding=self.settings.encoding))
            manifest = Manifest.model_validate(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            self._last_failure = Failure(
                reason=FailureReason.MANIFEST_UNREADABLE,
                message=str(e).splitlines()[0] if str(e) else type(e).__name__,
                path=path,
            )
            logger.warning(f"[{self.settings.docs_json_file_name}] {self._last_failure}")
            return None

        return manifest

    def _to_node(self, record: ComponentRecord, manifest_path: Path, known_tags: Set[str]) -> Node:
        dependencies = tuple(tag for tag in record.dependencies if tag in known_tags)

        dropped = len(record.dependencies) - len(dependencies)
        if dropped:
            logger.debug(f"{record.tag}: dropped {dropped} unknown dependencies")

        return Node(
            tag=record.tag,
            docs=record.docs,
            resolved_path=self._resolve_file_path(record.file_path, manifest_path),
            dependents=tuple(record.dependents),
            dependencies=dependencies,
        )

    def _resolve_file_path(self, file_path: Optional[str], manifest_path: Path) -> Optional[Path]:
        """
        Turn a component's manifest-relative `filePath` into an absolute path.

        A manifest with a custom name was declared in stencil.config.ts, so
        its paths are joined directly. One named docs.json may live beside
        the sources or at an emitted location far from them, so the file is
        searched for upwards from the manifest's directory.
        """
        if not file_path:
            return None

        manifest_dir = Path(os.path.abspath(manifest_path)).parent

        if not str(manifest_path).endswith(self.settings.docs_json_file_name):
            return Path(os.path.abspath(manifest_dir / file_path))

        return paths.search_upward(manifest_dir, file_path)
