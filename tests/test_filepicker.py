"""Test file picker result handling"""
from types import SimpleNamespace

from ui_filepicker import allowed_extensions, expand_folder, normalize_file_picker_result


class TestNormalizeFilePickerResult:
    def test_files_with_paths(self):
        result = SimpleNamespace(files=[SimpleNamespace(path="/a.txt", name="a.txt"), SimpleNamespace(path="/b.txt", name="b.txt")])
        assert normalize_file_picker_result(result) == (["/a.txt", "/b.txt"], [])

    def test_duplicates_removed(self):
        result = SimpleNamespace(files=["/a.txt", "/a.txt", "/b.txt"])
        paths, _ = normalize_file_picker_result(result)
        assert paths == ["/a.txt", "/b.txt"]

    def test_missing_path_reported(self):
        result = SimpleNamespace(files=[SimpleNamespace(path=None, name="ghost.txt")])
        paths, errors = normalize_file_picker_result(result)
        assert paths == []
        assert len(errors) == 1 and "ghost.txt" in errors[0]

    def test_directory_result(self):
        result = SimpleNamespace(files=None, path="/docs")
        assert normalize_file_picker_result(result) == (["/docs"], [])

    def test_cancelled(self):
        result = SimpleNamespace(files=None, path=None)
        assert normalize_file_picker_result(result) == ([], [])


class TestExpandFolder:
    def test_only_supported_direct_children(self, tmp_path):
        (tmp_path / "b.txt").write_text("b", encoding="utf-8")
        (tmp_path / "a.docx").write_bytes(b"")
        (tmp_path / "c.jpg").write_bytes(b"")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "d.txt").write_text("d", encoding="utf-8")

        names = [p.rsplit("/", 1)[-1] for p in expand_folder(tmp_path)]
        assert names == ["a.docx", "b.txt"]

    def test_missing_folder(self, tmp_path):
        assert expand_folder(tmp_path / "nope") == []


def test_allowed_extensions_have_no_dots():
    exts = allowed_extensions()
    assert "txt" in exts and "docx" in exts
    assert not any(e.startswith(".") for e in exts)
