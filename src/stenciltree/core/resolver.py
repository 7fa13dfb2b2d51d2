"""
Manifest Path Resolver.

Turns whatever the host knows about a project (a workspace folder, or a
file the user picked) into the absolute path of its `docs.json`.

Resolution Strategy:
    1. Direct reference - the path already names an existing docs.json
    2. Stencil config - read `outputTargets` in stencil.config.ts and follow
       the `docs-json` target's `file` relative to the project directory

The strategies do not fall through into each other: a path that already
names an existing manifest is trusted as-is.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..config import Settings
from ..parsing.stencil_config import StencilConfigExtractor
from . import paths
from .result import Err, Ok, Result
from .types import Failure, FailureReason

logger = logging.getLogger(__name__)


class ManifestPathResolver:
    """
    Resolves a project path to its docs.json manifest.

    Attributes:
        settings: File names and encoding in effect.
        extractor: Parser used to read the Stencil config.

    Example:
        ```python
        resolver = ManifestPathResolver()
        result = resolver.resolve("./my-components")
        if result.is_ok():
            print(result.unwrap())
        ```
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        extractor: Optional[StencilConfigExtractor] = None,
    ):
        self.settings = settings or Settings()
        self.extractor = extractor or StencilConfigExtractor(encoding=self.settings.encoding)

    def resolve(self, base_path: Optional[Union[str, Path]]) -> Result[Path, Failure]:
        """
        Locate the manifest for `base_path`.

        Args:
            base_path: A project directory, or a direct path to docs.json.

        Returns:
            Ok(Path) with the manifest location, or Err(Failure) describing
            why it could not be found.
        """
        if not base_path:
            return self._fail(FailureReason.NO_BASE_PATH, "No base path provided")

        base = Path(base_path)
        manifest_name = self.settings.docs_json_file_name

        if str(base).endswith(manifest_name) and paths.exists(base):
            logger.debug(f"Using manifest path as given: {base}")
            return Ok(base)

        config_path = base / self.settings.stencil_config_file_name
        if not paths.exists(config_path):
            return self._fail(
                FailureReason.CONFIG_NOT_FOUND,
                f"{self.settings.stencil_config_file_name} not found",
                config_path,
            )

        relative_path = self.extractor.extract_file(config_path)
        if not relative_path:
            return self._fail(
                FailureReason.MANIFEST_PATH_NOT_DECLARED,
                "No docs-json output target with a file declared",
                config_path,
            )

        manifest_path = Path(os.path.abspath(base / relative_path))
        if not paths.exists(manifest_path):
            return self._fail(
                FailureReason.MANIFEST_FILE_MISSING,
                f"Declared {manifest_name} does not exist",
                manifest_path,
            )

        logger.info(f"Resolved {manifest_name} via {config_path.name}: {manifest_path}")
        return Ok(manifest_path)

    def _fail(
        self,
        reason: FailureReason,
        message: str,
        path: Optional[Path] = None,
    ) -> Err[Failure]:
        failure = Failure(reason=reason, message=message, path=path)
        logger.warning(f"[{self.settings.docs_json_file_name}] {failure}")
        return Err(failure)
