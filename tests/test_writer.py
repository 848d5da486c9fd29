"""
Tests for the source writer and the file sink.

Tests cover:
    - Import collection from definitions
    - Header, marker and explanatory comment placement
    - Multi-line import blocks
    - Line ending normalization
    - Atomic create-or-truncate writes
"""

import os
import stat

import pytest

from tuplegen.backends import Formatter, SourceEmitter
from tuplegen.codemodel import Assignment, ClassDef, Function, Import, Module
from tuplegen.errors import AnchorNotFound, TupleGenError, WriteError
from tuplegen.writer import MARKER, FileSink, SourceWriter, find_import_anchor, normalize


class StubEmitter:
    """Returns fixed text regardless of the module."""

    def __init__(self, text):
        self.text = text

    def render_file(self, module):
        return self.text


def sample_module():
    cls = ClassDef(name="Box", imports=[Import("typing", "Generic")])
    cls.add(Function(name="get", parameters=[], returns="Any", imports=[Import("typing", "Any")]))
    module = Module(name="box", imports=[Import("__future__", "annotations")], comment=["Boxes.", "", "More."])
    module.add(Assignment("X", 'TypeVar("X")', imports=[Import("typing", "TypeVar")]))
    module.add(cls)
    return module


class TestCollectImports:
    """Test import collection."""

    def test_collects_from_module_definitions_and_members(self):
        imports = SourceWriter().collect_imports(sample_module())
        assert imports == [
            Import("__future__", "annotations"),
            Import("typing", "Any"),
            Import("typing", "Generic"),
            Import("typing", "TypeVar"),
        ]

    def test_deduplicates(self):
        module = sample_module()
        module.imports.append(Import("typing", "Any"))
        imports = SourceWriter().collect_imports(module)
        assert imports.count(Import("typing", "Any")) == 1


class TestWriteSource:
    """Test the final text layout."""

    def test_header_comes_first(self):
        writer = SourceWriter(SourceEmitter(Formatter.PLAIN), header=["Line one.", "", "Line two."])
        text = writer.write_source(sample_module())
        assert text.splitlines()[:3] == ["# Line one.", "#", "# Line two."]

    def test_marker_and_comment_follow_import_block(self):
        writer = SourceWriter(SourceEmitter(Formatter.PLAIN))
        lines = writer.write_source(sample_module()).splitlines()
        marker = lines.index(MARKER)
        assert lines[marker - 2] == "from typing import Any, Generic, TypeVar"
        assert lines[marker + 1:marker + 4] == ["# Boxes.", "#", "# More."]

    def test_marker_present_without_comment(self):
        module = sample_module()
        module.comment = []
        text = SourceWriter(SourceEmitter(Formatter.PLAIN)).write_source(module)
        assert text.count(MARKER) == 1

    def test_ends_with_exactly_one_newline(self):
        text = SourceWriter(SourceEmitter(Formatter.BLACK)).write_source(sample_module())
        assert text.endswith("\n")
        assert not text.endswith("\n\n")

    def test_line_endings_normalized(self):
        emitter = StubEmitter("import os\r\n\r\nx = 1\r\n\r\n\r\n")
        text = SourceWriter(emitter).write_source(Module(name="m"))
        assert "\r" not in text
        assert text == f"import os\n\n{MARKER}\n\nx = 1\n"

    def test_marker_goes_after_parenthesized_import(self):
        emitter = StubEmitter("from typing import (\n    Any,\n    Callable,\n)\n\nx = 1\n")
        lines = SourceWriter(emitter).write_source(Module(name="m")).splitlines()
        assert lines[lines.index(MARKER) - 2] == ")"

    def test_missing_import_block_raises(self):
        """Should name the file whose text had nothing to anchor to."""
        emitter = StubEmitter("x = 1\n")
        with pytest.raises(AnchorNotFound) as exc:
            SourceWriter(emitter).write_source(Module(name="orphan"))
        assert exc.value.filename == "orphan.py"

    def test_output_is_deterministic(self):
        writer = SourceWriter(SourceEmitter(Formatter.BLACK), header=["h"])
        assert writer.write_source(sample_module()) == writer.write_source(sample_module())


class TestImportAnchor:

    def test_indented_imports_do_not_count(self):
        lines = ["import os", "", "def f():", "    import sys", "    return sys"]
        assert find_import_anchor(lines) == 1

    def test_no_imports(self):
        with pytest.raises(AnchorNotFound):
            find_import_anchor(["x = 1"], "f.py")

    def test_normalize(self):
        assert normalize("a\r\nb\rc\n\n\n") == "a\nb\nc\n"


class TestFileSink:
    """Test atomic file writes."""

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "out" / "pkg" / "tuples.py"
        written = FileSink().write(target, "x = 1\n")
        assert written == target.resolve()
        assert target.read_text() == "x = 1\n"

    def test_truncates_existing_file(self, tmp_path):
        target = tmp_path / "tuples.py"
        target.write_text("old content that is longer\n" * 10)
        FileSink().write(target, "new\n")
        assert target.read_text() == "new\n"

    def test_accepts_lines(self, tmp_path):
        target = tmp_path / "tuples.py"
        FileSink().write(target, ["a = 1", "b = 2"])
        assert target.read_text() == "a = 1\nb = 2\n"

    def test_leaves_no_temporary_files(self, tmp_path):
        FileSink().write(tmp_path / "tuples.py", "x = 1\n")
        assert [p.name for p in tmp_path.iterdir()] == ["tuples.py"]

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_new_file_mode(self, tmp_path):
        target = tmp_path / "tuples.py"
        FileSink().write(target, "x = 1\n")
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_existing_file_keeps_mode(self, tmp_path):
        target = tmp_path / "tuples.py"
        target.write_text("old\n")
        os.chmod(target, 0o600)
        FileSink().write(target, "new\n")
        assert stat.S_IMODE(target.stat().st_mode) == 0o600

    def test_writes_unix_newlines(self, tmp_path):
        target = tmp_path / "tuples.py"
        FileSink().write(target, "a\nb\n")
        assert target.read_bytes() == b"a\nb\n"


class TestFileSinkFailures:
    """Test that a failed write leaves the directory as it was."""

    def test_unencodable_text_raises_write_error(self, tmp_path):
        target = tmp_path / "tuples.py"
        with pytest.raises(WriteError) as exc:
            FileSink().write(target, "x = '\udcff'\n")
        assert exc.value.filename == str(target)
        assert "file=" in str(exc.value)
        assert list(tmp_path.iterdir()) == []

    def test_unencodable_text_keeps_existing_file(self, tmp_path):
        target = tmp_path / "tuples.py"
        target.write_text("old\n")
        with pytest.raises(WriteError):
            FileSink().write(target, "x = '\udcff'\n")
        assert target.read_text() == "old\n"
        assert [p.name for p in tmp_path.iterdir()] == ["tuples.py"]

    def test_failed_rename_removes_temporary_file(self, tmp_path, monkeypatch):
        """Should unlink the temporary file when it cannot replace the target."""
        target = tmp_path / "tuples.py"
        target.write_text("old\n")

        def refuse(src, dst):
            raise PermissionError("read-only destination")

        monkeypatch.setattr(os, "replace", refuse)
        with pytest.raises(WriteError) as exc:
            FileSink().write(target, "new\n")
        assert exc.value.filename == str(target)
        assert isinstance(exc.value.__cause__, PermissionError)
        assert target.read_text() == "old\n"
        assert [p.name for p in tmp_path.iterdir()] == ["tuples.py"]

    def test_interrupted_write_removes_temporary_file(self, tmp_path, monkeypatch):
        """Should clean up on non-OSError failures too, and let them propagate."""

        def interrupt(path, mode):
            raise KeyboardInterrupt

        monkeypatch.setattr(os, "chmod", interrupt)
        with pytest.raises(KeyboardInterrupt):
            FileSink().write(tmp_path / "tuples.py", "x = 1\n")
        assert list(tmp_path.iterdir()) == []

    def test_directory_in_the_way_raises_write_error(self, tmp_path):
        target = tmp_path / "tuples.py"
        target.mkdir()
        with pytest.raises(WriteError):
            FileSink().write(target, "x = 1\n")
        assert [p.name for p in tmp_path.iterdir()] == ["tuples.py"]
        assert target.is_dir()

    def test_write_error_is_a_tuplegen_error(self):
        assert issubclass(WriteError, TupleGenError)
