from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from gitploy.errors import WorkspaceError

logger = logging.getLogger(__name__)


def provision_workspace(prefix: str = "gitploy-") -> Path:
    """Create a fresh, empty, uniquely named directory under the system temp root."""
    try:
        path = tempfile.mkdtemp(prefix=prefix)
    except OSError as e:
        raise WorkspaceError(
            f"Error creating tempdir under {tempfile.gettempdir()}: {e}"
        ) from e
    logger.info("Workspace created at %s", path)
    return Path(path).resolve()


@contextmanager
def scoped_workspace(keep: bool = False, prefix: str = "gitploy-") -> Iterator[Path]:
    path = provision_workspace(prefix)
    try:
        yield path
    finally:
        if keep:
            logger.info("Keeping workspace at %s", path)
        else:
            _remove(path)


def _remove(path: Path) -> None:
    try:
        shutil.rmtree(path)
        logger.info("Workspace removed: %s", path)
    except OSError:
        logger.warning("Failed to remove workspace %s", path)
