"""Single-slot storage for the most recent :class:`UserPlan`."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog
from pydantic import ValidationError

from ..schemas.plans import UserPlan

logger = structlog.get_logger(__name__)


class SnapshotStore(Protocol):
    def load(self) -> UserPlan | None: ...

    def save(self, plan: UserPlan) -> None: ...

    def clear(self) -> None: ...


class FileSnapshotStore:
    """Keeps one plan as a JSON file. Saving replaces the previous plan."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> UserPlan | None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("snapshot_read_failed", path=str(self.path), error=str(exc))
            return None

        # Decoding happens here too, so bad UTF-8 counts as a corrupt snapshot.
        try:
            return UserPlan.model_validate_json(raw.decode("utf-8"))
        except (ValidationError, ValueError) as exc:
            logger.warning("snapshot_corrupt", path=str(self.path), error=str(exc))
            return None

    def save(self, plan: UserPlan) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(plan.model_dump_json(by_alias=True))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("snapshot_saved", path=str(self.path))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.info("snapshot_cleared", path=str(self.path))
