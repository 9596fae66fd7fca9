"""Directory listing for picking a config file.

Lists a ``..`` entry (unless at the filesystem root), then directories,
then files, each group sorted by path. Selection wraps around at both
ends. No resolution logic lives here; a selected file is only ever
handed on as a path.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PARENT = ".."


class FileExplorer:
    """Cursor over the entries of one directory."""

    def __init__(self, current_dir: Path | None = None) -> None:
        self.current_dir = (current_dir or Path.cwd()).resolve()
        self.files: list[Path] = []
        self.selected_index = 0
        self.load_directory()

    def load_directory(self) -> None:
        """Re-read ``current_dir`` and reset the selection."""
        self.files = []
        self.selected_index = 0

        if self.current_dir.parent != self.current_dir:
            self.files.append(self.current_dir / PARENT)

        dirs: list[Path] = []
        files: list[Path] = []
        try:
            children = list(self.current_dir.iterdir())
        except OSError:
            logger.warning("Cannot list directory %s", self.current_dir)
            children = []
        for child in children:
            (dirs if child.is_dir() else files).append(child)

        self.files.extend(sorted(dirs))
        self.files.extend(sorted(files))

    @property
    def selected(self) -> Path | None:
        if not self.files:
            return None
        return self.files[self.selected_index]

    def next(self) -> None:
        if self.files:
            self.selected_index = (self.selected_index + 1) % len(self.files)

    def previous(self) -> None:
        if self.files:
            self.selected_index = (self.selected_index - 1) % len(self.files)

    def move_to(self, name: str) -> bool:
        """Step the cursor onto the entry called *name*, the short way round.

        Returns False, leaving the cursor alone, if there is no such entry.
        """
        names = [entry.name for entry in self.files]
        if name not in names:
            return False
        target = names.index(name)
        ahead = (target - self.selected_index) % len(names)
        step = self.next if ahead <= len(names) - ahead else self.previous
        while self.selected_index != target:
            step()
        return True

    def select(self) -> Path | None:
        """Act on the highlighted entry.

        Ascends on ``..``, descends into a directory, and returns the path
        of a file. Returns None whenever the directory changed instead.
        """
        selected = self.selected
        if selected is None:
            return None
        if selected.name == PARENT:
            self.current_dir = self.current_dir.parent
            self.load_directory()
            return None
        if selected.is_dir():
            self.current_dir = selected
            self.load_directory()
            return None
        return selected
