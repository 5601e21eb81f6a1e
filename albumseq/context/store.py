"""
Context file holding the user's tracklists, media and constraints.

A ProgramContext is loaded once per command, mutated in memory and written
back atomically when the command succeeds.
"""

import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Union

import structlog
from pydantic import BaseModel, Field, ValidationError

from albumseq.context.models import (
    NamedTracklist,
    StoredConstraint,
    StoredMedium,
    StoredTrack,
)
from albumseq.exceptions import AlbumseqError, ContextError, NotFoundError
from albumseq.sequencing.models import Constraint, Medium, Track

logger = structlog.get_logger()

PathLike = Union[str, Path]


class ProgramContext(BaseModel):
    """Everything albumseq remembers between invocations."""

    tracklists: List[NamedTracklist] = Field(default_factory=list)
    mediums: List[StoredMedium] = Field(default_factory=list)
    constraints: List[StoredConstraint] = Field(default_factory=list)

    @classmethod
    def load(cls, path: PathLike) -> "ProgramContext":
        """
        Read a context file.

        Raises:
            ContextError: If the file cannot be read or is not a valid context
        """
        path = Path(path)
        try:
            data = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ContextError(f"Failed to read context file {path}: {e}") from e

        try:
            ctx = cls.model_validate_json(data)
        except ValidationError as e:
            raise ContextError(f"Failed to parse context file {path}: {e}") from e

        logger.debug(
            "Context loaded",
            path=str(path),
            tracklists=len(ctx.tracklists),
            mediums=len(ctx.mediums),
            constraints=len(ctx.constraints),
        )
        return ctx

    @classmethod
    def load_or_empty(cls, path: PathLike) -> "ProgramContext":
        """
        Load the context file, or start from an empty context if it does not
        exist. Nothing is written; the file appears on the first save.
        """
        path = Path(path)
        if path.exists():
            return cls.load(path)

        logger.debug("No context file yet, starting empty", path=str(path))
        return cls()

    def save(self, path: PathLike) -> None:
        """Write the context as pretty JSON, replacing the file atomically."""
        path = Path(path)
        payload = self.model_dump_json(indent=2)

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise ContextError(f"Failed to write context file {path}: {e}") from e

        logger.debug("Context saved", path=str(path))

    def find_tracklist(self, name: str) -> NamedTracklist:
        for tracklist in self.tracklists:
            if tracklist.name.casefold() == name.casefold():
                return tracklist
        raise NotFoundError(f"Tracklist '{name}' not found")

    def find_medium(self, name: str) -> StoredMedium:
        for medium in self.mediums:
            if medium.name.casefold() == name.casefold():
                return medium
        raise NotFoundError(f"Medium '{name}' not found")

    def engine_constraints(self) -> List[Constraint]:
        """Constraints converted for the sequencing engine."""
        try:
            return [stored.to_constraint() for stored in self.constraints]
        except AlbumseqError as e:
            raise ContextError(f"Invalid constraint in context: {e}") from e

    def add_or_replace_tracklist(self, name: str, tracks: Sequence[Track]) -> bool:
        """Store a tracklist under ``name``. Returns True if one was replaced."""
        new_list = NamedTracklist(
            name=name,
            tracks=[StoredTrack.from_track(track) for track in tracks],
        )
        index = self._index_by_name(self.tracklists, name)
        if index is None:
            self.tracklists.append(new_list)
            return False

        self.tracklists[index] = new_list
        return True

    def add_or_replace_medium(self, medium: Medium) -> bool:
        """Store a medium under its name. Returns True if one was replaced."""
        new_medium = StoredMedium(
            name=medium.name,
            sides=medium.sides,
            max_duration_per_side=medium.max_duration_per_side,
        )
        index = self._index_by_name(self.mediums, medium.name)
        if index is None:
            self.mediums.append(new_medium)
            return False

        self.mediums[index] = new_medium
        return True

    def add_or_replace_constraint(self, constraint: Constraint) -> bool:
        """
        Store a constraint. A constraint of the same variant naming the
        same titles (ignoring case) is replaced, which updates its weight.
        """
        stored = StoredConstraint.from_constraint(constraint)
        for index, existing in enumerate(self.constraints):
            if existing.kind.identity() == stored.kind.identity():
                self.constraints[index] = stored
                return True

        self.constraints.append(stored)
        return False

    def remove_constraint(self, index: int) -> StoredConstraint:
        """Remove and return the constraint at ``index``."""
        if not 0 <= index < len(self.constraints):
            raise NotFoundError(
                f"Constraint index {index} out of range ({len(self.constraints)} constraints)"
            )
        return self.constraints.pop(index)

    @staticmethod
    def _index_by_name(items, name: str) -> Optional[int]:
        for index, item in enumerate(items):
            if item.name.casefold() == name.casefold():
                return index
        return None
