"""Tests for BrowseService."""

from pathlib import Path

from nodecfg.services.browse import BrowseService


class TestListDirectory:
    def test_lists_items(self, tmp_path: Path) -> None:
        (tmp_path / "conf.d").mkdir()
        (tmp_path / "bitcoin.conf").write_text("")
        result = BrowseService().list_directory(tmp_path)
        assert result.ok
        assert result.op == "list_directory"
        kinds = [(i["name"], i["kind"]) for i in result.data["items"]]
        assert kinds == [("..", "dir"), ("conf.d", "dir"), ("bitcoin.conf", "file")]
        assert result.data["count"] == 3

    def test_defaults_to_cwd(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory()
        assert result.data["path"] == str(tmp_path.resolve())

    def test_not_a_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "bitcoin.conf"
        path.write_text("")
        result = BrowseService().list_directory(path)
        assert not result.ok
        assert result.error.code == "NOT_A_DIRECTORY"

    def test_missing_path(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(tmp_path / "absent")
        assert result.error.code == "NOT_A_DIRECTORY"
        assert result.error.detail["path"] == str(tmp_path / "absent")


class TestSelect:
    def _tree(self, root: Path) -> Path:
        (root / "p2pool").mkdir()
        (root / "p2pool" / "config.toml").write_text("")
        (root / "bitcoin.conf").write_text("")
        return root

    def test_descends(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(self._tree(tmp_path), ["p2pool"])
        assert result.data["path"] == str(tmp_path.resolve() / "p2pool")
        assert result.data["selected"] is None

    def test_ascends_again(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(self._tree(tmp_path), ["p2pool", ".."])
        assert result.data["path"] == str(tmp_path.resolve())

    def test_file_is_selected(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(self._tree(tmp_path), ["p2pool", "config.toml"])
        assert result.ok
        assert result.data["selected"] == str(tmp_path.resolve() / "p2pool" / "config.toml")
        assert result.data["path"] == str(tmp_path.resolve() / "p2pool")

    def test_unknown_name(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(self._tree(tmp_path), ["nope"])
        assert result.error.code == "NO_SUCH_ENTRY"

    def test_cannot_enter_a_file(self, tmp_path: Path) -> None:
        result = BrowseService().list_directory(self._tree(tmp_path), ["bitcoin.conf", "x"])
        assert result.error.code == "NOT_A_DIRECTORY"
        assert result.error.detail["path"] == str(tmp_path.resolve() / "bitcoin.conf")
