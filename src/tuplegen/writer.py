"""
Source writer and file sink.

SourceWriter turns a Module into the final text of one generated file:

    # <header block>
    from __future__ import annotations
    ...                                   <- import block, collected from the body

    # AUTO GENERATED, DO NOT EDIT
    # <explanatory comment, if the module has one>

    <definitions>

FileSink puts that text on disk. A file is either fully written or left as
it was: the text goes to a temporary file in the target directory first and
is then renamed over the destination.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from tuplegen.backends import SourceEmitter
from tuplegen.codemodel import ClassDef, Import, Module
from tuplegen.errors import AnchorNotFound, WriteError
from tuplegen.logging import get_logger

logger = get_logger(__name__)

MARKER = "# AUTO GENERATED, DO NOT EDIT"

DEFAULT_FILE_MODE = 0o644


def _comment(lines: Iterable[str]) -> List[str]:
    return [f"# {line}" if line else "#" for line in lines]


def find_import_anchor(lines: List[str], filename: Optional[str] = None) -> int:
    """
    Index of the line right after the last top-level import statement.

    Parenthesized multi-line imports count up to their closing line.

    Raises:
        AnchorNotFound: if there is no top-level import at all
    """
    anchor = None
    index = 0
    while index < len(lines):
        line = lines[index]
        if line.startswith(("import ", "from ")):
            if "(" in line and ")" not in line:
                while index < len(lines) - 1 and ")" not in lines[index]:
                    index += 1
            anchor = index + 1
        index += 1

    if anchor is None:
        raise AnchorNotFound("rendered source has no import block", filename=filename)
    return anchor


def normalize(text: str) -> str:
    """``\\n`` line endings and exactly one trailing newline."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.rstrip("\n") + "\n"


class SourceWriter:
    """
    Produces the final text of generated modules.

    Args:
        emitter: Backend used to render the code model
        header: Lines of the header block, written as comments at the very top
    """

    def __init__(self, emitter: Optional[SourceEmitter] = None, header: Optional[List[str]] = None):
        self.emitter = emitter or SourceEmitter()
        self.header = list(header or [])

    def collect_imports(self, module: Module) -> List[Import]:
        """Every import the module's definitions ask for, deduplicated and sorted."""
        collected = set(module.imports)
        for definition in module.body:
            collected.update(definition.imports)
            if isinstance(definition, ClassDef):
                for member in definition.members:
                    collected.update(member.imports)
        return sorted(collected, key=lambda imp: (imp.module, imp.name or ""))

    def write_source(self, module: Module) -> str:
        """
        Render ``module`` and wrap it with the header, marker and comment.

        Raises:
            AnchorNotFound: if the rendered text has no import block
            RenderError: if the backend rejects the rendered source
        """
        module.imports = self.collect_imports(module)
        rendered = normalize(self.emitter.render_file(module))

        lines = rendered.split("\n")
        anchor = find_import_anchor(lines, module.filename)

        block = ["", MARKER]
        block.extend(_comment(module.comment))
        lines[anchor:anchor] = block

        text = "\n".join(lines)
        if self.header:
            text = "\n".join(_comment(self.header)) + "\n" + text
        return normalize(text)


class FileSink:
    """
    Writes generated files with create-or-truncate semantics.

    The parent directory is created when missing. An existing destination
    keeps its permission bits; a new one gets 0o644.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def write(self, path: Union[str, Path], lines: Union[str, Iterable[str]]) -> Path:
        """
        Replace ``path`` with ``lines``.

        Args:
            path: Destination file
            lines: Full text, or an iterable of lines without line endings

        Returns:
            The resolved destination path

        Raises:
            WriteError: if the text cannot be encoded or the file cannot be written;
                no temporary file is left behind
        """
        path = Path(path)
        text = lines if isinstance(lines, str) else "\n".join(lines) + "\n"

        try:
            data = text.encode(self.encoding)
        except UnicodeError as e:
            raise WriteError(f"Generated text cannot be encoded as {self.encoding}: {e}", filename=str(path)) from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = path.stat().st_mode & 0o777 if path.exists() else DEFAULT_FILE_MODE

            f = tempfile.NamedTemporaryFile(
                "wb",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            )
            temp_path = Path(f.name)
            try:
                with f:
                    f.write(data)
                os.chmod(temp_path, mode)
                os.replace(temp_path, path)
            except BaseException:
                temp_path.unlink(missing_ok=True)
                raise
        except OSError as e:
            raise WriteError(f"Cannot write generated file: {e}", filename=str(path)) from e

        logger.info("Wrote %s (%d bytes)", path, len(data))
        return path.resolve()


__all__ = ["FileSink", "MARKER", "SourceWriter", "find_import_anchor", "normalize"]
