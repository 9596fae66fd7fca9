"""BrowseService — directory listings for choosing a config file."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from nodecfg.infrastructure.explorer import PARENT, FileExplorer
from nodecfg.services.result import ServiceError, ServiceResult


class BrowseService:
    """Lists candidate files the way the picker presents them."""

    def list_directory(
        self, path: Path | str | None = None, select: Sequence[str] = ()
    ) -> ServiceResult:
        """List *path*, after first following each name in *select*.

        Names are entered in order exactly as the picker would: ``..``
        ascends, a directory descends, and a file ends the walk and is
        reported as ``selected``.
        """
        op = "list_directory"
        target = Path(path) if path is not None else Path.cwd()
        if not target.is_dir():
            return _error(op, "NOT_A_DIRECTORY", f"Not a directory: {target}", target)

        explorer = FileExplorer(target)
        chosen: Path | None = None
        for name in select:
            if chosen is not None:
                return _error(op, "NOT_A_DIRECTORY", f"Not a directory: {chosen}", chosen)
            if not explorer.move_to(name):
                path_tried = explorer.current_dir / name
                return _error(op, "NO_SUCH_ENTRY", f"No such entry: {path_tried}", path_tried)
            chosen = explorer.select()

        items = [
            {
                "name": entry.name,
                "path": str(entry),
                "kind": "dir" if entry.name == PARENT or entry.is_dir() else "file",
            }
            for entry in explorer.files
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(explorer.current_dir),
                "count": len(items),
                "items": items,
                "selected": str(chosen) if chosen is not None else None,
            },
        )


def _error(op: str, code: str, message: str, path: Path) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail={"path": str(path)}),
    )
