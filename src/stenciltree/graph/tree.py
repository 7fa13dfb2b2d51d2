"""
Component tree facade for editor hosts.

`ComponentTree` is what a side panel or webview talks to: it remembers which
project (or manually opened manifest) is current, resolves its docs.json, and
serves root nodes and expansions from the materializer.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..config import Settings
from ..core import paths
from ..core.resolver import ManifestPathResolver
from ..core.result import Err, Ok, Result
from ..core.types import Failure, FailureReason, Node
from .materializer import DependencyGraphMaterializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolverState:
    """
    The current source of the tree. Replaced wholesale, never edited.

    Attributes:
        base_path: The path the host asked for.
        manifest_path: Where its docs.json was found, if anywhere.
        failure: Why resolution failed, if it did.
        manual: The user picked the manifest file directly.
    """

    base_path: Optional[Path] = None
    manifest_path: Optional[Path] = None
    failure: Optional[Failure] = None
    manual: bool = False


class ComponentTree:
    """
    Host-facing tree of Stencil components.

    Example:
        ```python
        tree = ComponentTree(workspace_root)
        for node in tree.get_children():
            children = tree.get_children(node) if node.expandable else []
        ```
    """

    def __init__(
        self,
        base_path: Optional[Union[str, Path]] = None,
        settings: Optional[Settings] = None,
    ):
        # Settings passed in stay fixed; otherwise each project's own are used
        self._settings_from_project = settings is None
        self._apply_settings(settings or Settings.load())
        self._state = ResolverState()
        self.refresh(base_path)

    @property
    def base_path(self) -> Optional[Path]:
        return self._state.base_path

    @property
    def manifest_path(self) -> Optional[Path]:
        return self._state.manifest_path

    @property
    def failure(self) -> Optional[Failure]:
        """The resolution failure, or the last load failure for the current manifest."""
        if self._state.failure:
            return self._state.failure
        load_failure = self.materializer.last_failure
        if load_failure and load_failure.path == self.manifest_path:
            return load_failure
        return None

    @property
    def not_found(self) -> bool:
        """True when the host should show its "docs.json not found" state."""
        return self.manifest_path is None

    def refresh(self, base_path: Optional[Union[str, Path]] = None) -> Result[Path, Failure]:
        """
        Re-resolve the manifest and replace the current state.

        Without an argument, a manually opened manifest is only checked for
        existence again; stencil config discovery is not attempted.

        Args:
            base_path: New project path; defaults to the current one.

        Returns:
            The result for the new state.
        """
        if not base_path and self._state.manual:
            return self._recheck_manual(self._state.base_path)

        target = Path(base_path) if base_path else self._state.base_path
        if base_path and self._settings_from_project:
            project_settings = Settings.load(target)
            if project_settings != self.settings:
                self._apply_settings(project_settings)

        result = self.resolver.resolve(target)
        self._state = ResolverState(
            base_path=target,
            manifest_path=result.unwrap_or(None),
            failure=result.error if isinstance(result, Err) else None,
        )
        return result

    def open_manifest(self, manifest_path: Union[str, Path]) -> Result[Path, Failure]:
        """
        Use a manifest the user picked, bypassing stencil config discovery.

        The current state is kept if the file does not exist.
        """
        manifest_path = Path(manifest_path)
        if not paths.exists(manifest_path):
            failure = self._missing_pick(manifest_path)
            return Err(failure)

        self._state = ResolverState(base_path=manifest_path, manifest_path=manifest_path, manual=True)
        return Ok(manifest_path)

    def get_children(self, node: Optional[Node] = None) -> List[Node]:
        """
        Root nodes when called without a node, otherwise one level of children.

        Loading root nodes re-reads the manifest, so a host refresh only
        needs to call this again.
        """
        if node is not None:
            return self.materializer.get_children(node)

        if self.manifest_path is None:
            logger.info("No docs.json path defined.")
            return []

        return self.materializer.load(self.manifest_path)

    def source_path(self, node: Node) -> Optional[Path]:
        """File backing `node`, for "open component" style actions."""
        if node.resolved_path is None:
            logger.error(f"No source path known for {node.tag}")
        return node.resolved_path

    def _apply_settings(self, settings: Settings) -> None:
        self.settings = settings
        self.resolver = ManifestPathResolver(settings)
        self.materializer = DependencyGraphMaterializer(settings)

    def _recheck_manual(self, picked: Path) -> Result[Path, Failure]:
        """Refresh a manually opened manifest, keeping it as the source."""
        if paths.exists(picked):
            self._state = ResolverState(base_path=picked, manifest_path=picked, manual=True)
            return Ok(picked)

        failure = self._missing_pick(picked)
        self._state = ResolverState(base_path=picked, failure=failure, manual=True)
        return Err(failure)

    def _missing_pick(self, path: Path) -> Failure:
        failure = Failure(
            reason=FailureReason.MANIFEST_FILE_MISSING,
            message="Selected file does not exist",
            path=path,
        )
        logger.warning(f"[open_manifest] {failure}")
        return failure
