"""On-disk layout of a maze dataset.

A dataset directory holds ``mazes/maze_<rows>x<cols>_<id>.txt`` files,
optional ``images/`` previews with the same stem, and a ``mazes.json`` index
listing one record per maze with paths relative to the directory.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from .codec import PathLike, load_maze
from .errors import FormatError, InvalidArgument
from .grid import Grid, Position

INDEX_FILENAME = "mazes.json"
MAZE_SUBDIR = "mazes"
IMAGE_SUBDIR = "images"

RecordT = TypeVar("RecordT")


def maze_stem(rows: int, cols: int, maze_id: str) -> str:
    return f"maze_{rows}x{cols}_{maze_id}"


def read_index(path: PathLike) -> List[Dict[str, Any]]:
    source = Path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormatError(f"{source} is not valid JSON: {exc}") from exc
    if not isinstance(raw, list) or not all(isinstance(entry, dict) for entry in raw):
        raise FormatError(f"{source} must hold a list of maze records")
    return raw


class AbstractDatasetGenerator(ABC, Generic[RecordT]):
    """Writes maze files and previews into a dataset directory."""

    def __init__(self, output_dir: PathLike, *, render_images: bool = True) -> None:
        self.output_dir = Path(output_dir)
        self.render_images = render_images
        self.maze_dir = self.output_dir / MAZE_SUBDIR
        self.image_dir = self.output_dir / IMAGE_SUBDIR
        self.maze_dir.mkdir(parents=True, exist_ok=True)
        if self.render_images:
            self.image_dir.mkdir(parents=True, exist_ok=True)

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILENAME

    @abstractmethod
    def create_maze(self, *, maze_id: Optional[str] = None) -> Tuple[RecordT, Grid]:
        """Generate and store one maze, returning its record and grid."""

    def maze_file(self, rows: int, cols: int, maze_id: str) -> Path:
        return self.maze_dir / f"{maze_stem(rows, cols, maze_id)}.txt"

    def image_file(self, rows: int, cols: int, maze_id: str) -> Path:
        return self.image_dir / f"{maze_stem(rows, cols, maze_id)}.png"

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[Tuple[RecordT, Grid]]:
        """Create ``count`` mazes and add their records to the index.

        The index defaults to ``mazes.json`` inside the output directory.
        """

        if count < 0:
            raise InvalidArgument(f"count must be non-negative, got {count}")
        entries = [self.create_maze() for _ in range(count)]
        self.write_index(
            [record for record, _ in entries],
            metadata_path if metadata_path is not None else self.index_path,
            append=append,
        )
        return entries

    def write_index(self, records: List[RecordT], path: PathLike, *, append: bool = True) -> None:
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        existing = read_index(destination) if append and destination.exists() else []
        payload = existing + [getattr(record, "to_dict")() for record in records]
        destination.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def relativize_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


class AbstractDatasetEvaluator(ABC):
    """Looks up mazes by id in a dataset index and loads their grids."""

    def __init__(
        self,
        metadata_path: PathLike,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self.base_dir = Path(base_dir) if base_dir is not None else self.metadata_path.parent
        self._records: Dict[str, Dict[str, Any]] = {}
        for record in read_index(self.metadata_path):
            maze_id = record.get("id")
            if not maze_id:
                raise FormatError("Each maze record must include an 'id'")
            self._records[str(maze_id)] = record

    def get_record(self, maze_id: str) -> Dict[str, Any]:
        try:
            return self._records[maze_id]
        except KeyError as exc:
            raise KeyError(f"Maze id '{maze_id}' not found in metadata") from exc

    def resolve_path(self, path_value: object) -> Path:
        candidate = Path(str(path_value))
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate

    def _field(self, maze_id: str, name: str) -> Any:
        record = self.get_record(maze_id)
        if name not in record:
            raise FormatError(f"Maze record '{maze_id}' has no '{name}'")
        return record[name]

    def load_grid(self, maze_id: str) -> Grid:
        return load_maze(self.resolve_path(self._field(maze_id, "maze_path")))

    def endpoints(self, maze_id: str) -> Tuple[Position, Position]:
        cells = []
        for name in ("start", "goal"):
            value = self._field(maze_id, name)
            if not isinstance(value, list):
                raise FormatError(f"Maze record '{maze_id}' has a malformed '{name}': {value!r}")
            cells.append(tuple(value))
        return cells[0], cells[1]

    @abstractmethod
    def evaluate(self, maze_id: str, *args, **kwargs):
        """Evaluate a candidate answer for the given maze."""


__all__ = [
    "AbstractDatasetGenerator",
    "AbstractDatasetEvaluator",
    "INDEX_FILENAME",
    "PathLike",
    "maze_stem",
    "read_index",
]
