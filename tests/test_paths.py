"""Folder reference resolution."""

from tidyagent.core.paths import resolve_folder_reference


def test_shortcut_keywords(tmp_path) -> None:
    (tmp_path / "Downloads").mkdir()
    assert resolve_folder_reference("downloads", home=tmp_path) == (tmp_path / "Downloads").resolve()
    assert resolve_folder_reference("  'DOWNLOADS' ", home=tmp_path) == (tmp_path / "Downloads").resolve()
    assert resolve_folder_reference("home", home=tmp_path) == tmp_path.resolve()


def test_onedrive_desktop_preferred(tmp_path) -> None:
    (tmp_path / "Desktop").mkdir()
    (tmp_path / "OneDrive" / "Desktop").mkdir(parents=True)
    assert resolve_folder_reference("desktop", home=tmp_path) == (
        tmp_path / "OneDrive" / "Desktop"
    ).resolve()


def test_missing_shortcut_folder(tmp_path) -> None:
    assert resolve_folder_reference("music", home=tmp_path) is None


def test_literal_and_tilde_paths(tmp_path) -> None:
    target = tmp_path / "stuff"
    target.mkdir()
    assert resolve_folder_reference(str(target)) == target.resolve()
    assert resolve_folder_reference("~/stuff", home=tmp_path) == target.resolve()


def test_unresolvable_references(tmp_path) -> None:
    (tmp_path / "file.txt").write_text("x")
    assert resolve_folder_reference(str(tmp_path / "nope")) is None
    assert resolve_folder_reference(str(tmp_path / "file.txt")) is None
    assert resolve_folder_reference("   ") is None
