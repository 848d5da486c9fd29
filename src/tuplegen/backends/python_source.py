"""
Python source backend for the code model.

Converts ClassDef / Function / Module objects into Python source text.

Supports two formatters:
    - PLAIN: the renderer's own layout, no reformatting
    - BLACK: the rendered text run through black

Line wrapping is black's business, not ours. The line length is a plain
option here; None means unbounded, which keeps every signature on one line
no matter how many type parameters it carries.
"""

import sys
from enum import Enum
from typing import List, Optional

import black

from tuplegen.codemodel import Assignment, ClassDef, Definition, Function, Import, Module, Parameter
from tuplegen.errors import RenderError

INDENT = "    "

UNBOUNDED_LINE_LENGTH = sys.maxsize


class Formatter(Enum):
    """Formatting applied to rendered source."""
    PLAIN = "plain"    # Renderer layout only
    BLACK = "black"    # Reformatted by black


def _render_parameter(param: Parameter) -> str:
    text = f"*{param.name}" if param.variadic else param.name
    if param.annotation:
        text = f"{text}: {param.annotation}"
    if param.default is not None:
        text = f"{text} = {param.default}" if param.annotation else f"{text}={param.default}"
    return text


def _render_docstring(docstring: str, indent: str) -> List[str]:
    lines = docstring.strip("\n").split("\n")
    if len(lines) == 1:
        return [f'{indent}"""{lines[0]}"""']
    rendered = [f'{indent}"""{lines[0]}']
    rendered.extend(f"{indent}{line}" if line.strip() else "" for line in lines[1:])
    rendered.append(f'{indent}"""')
    return rendered


def _render_function(fn: Function, indent: str = "") -> List[str]:
    lines = [f"{indent}@{decorator}" for decorator in fn.decorators]

    params = ", ".join(_render_parameter(p) for p in fn.parameters)
    returns = f" -> {fn.returns}" if fn.returns else ""
    lines.append(f"{indent}def {fn.name}({params}){returns}:")

    body_indent = indent + INDENT
    if fn.docstring:
        lines.extend(_render_docstring(fn.docstring, body_indent))
    for statement in fn.body:
        lines.append(f"{body_indent}{statement}" if statement else "")
    if not fn.docstring and not fn.body:
        lines.append(f"{body_indent}...")
    return lines


def _render_assignment(assignment: Assignment, indent: str = "") -> List[str]:
    return [f"{indent}{assignment.target} = {assignment.value}"]


def _render_class(cls: ClassDef, indent: str = "") -> List[str]:
    bases = f"({', '.join(cls.bases)})" if cls.bases else ""
    lines = [f"{indent}class {cls.name}{bases}:"]

    member_indent = indent + INDENT
    if cls.docstring:
        lines.extend(_render_docstring(cls.docstring, member_indent))

    previous = None
    for member in cls.members:
        # blank line between members, except between consecutive assignments
        if previous is not None and not (isinstance(previous, Assignment) and isinstance(member, Assignment)):
            lines.append("")
        elif previous is None and cls.docstring:
            lines.append("")
        if isinstance(member, Function):
            lines.extend(_render_function(member, member_indent))
        else:
            lines.extend(_render_assignment(member, member_indent))
        previous = member

    if not cls.docstring and not cls.members:
        lines.append(f"{member_indent}pass")
    return lines


def _render_definition(definition: Definition) -> List[str]:
    if isinstance(definition, ClassDef):
        return _render_class(definition)
    if isinstance(definition, Function):
        return _render_function(definition)
    return _render_assignment(definition)


def _import_group(module: str) -> int:
    if module == "__future__":
        return 0
    if module.startswith("."):
        return 3
    if module.split(".")[0] in sys.stdlib_module_names:
        return 1
    return 2


def render_imports(imports: List[Import]) -> List[str]:
    """
    Render an import block.

    Groups, in order: ``__future__``, standard library, everything else
    absolute, relative. Names from one module share a single line.
    """
    bare = sorted({imp.module for imp in imports if imp.name is None})
    named = {}
    for imp in imports:
        if imp.name is not None:
            named.setdefault(imp.module, set()).add(imp.name)

    lines = []
    for group in range(4):
        block = [f"import {module}" for module in bare if _import_group(module) == group]
        block += [
            f"from {module} import {', '.join(sorted(names))}"
            for module, names in sorted(named.items())
            if _import_group(module) == group
        ]
        block.sort(key=lambda line: line.split()[1])
        if block:
            if lines:
                lines.append("")
            lines.extend(block)
    return lines


def render_module(module: Module) -> str:
    """Render a whole module: import block, then the body in emission order."""
    lines = render_imports(module.imports)

    previous = None
    for definition in module.body:
        if lines:
            if isinstance(previous, Assignment) and isinstance(definition, Assignment):
                pass
            else:
                lines.extend(["", ""])
        lines.extend(_render_definition(definition))
        previous = definition
    return "\n".join(lines) + "\n"


class SourceEmitter:
    """
    Renders code model objects to Python source.

    This is the only place that knows how the text is laid out. Callers treat
    it as a black box: a model goes in, text comes out.
    """

    def __init__(self, formatter: Formatter = Formatter.BLACK, line_length: Optional[int] = None):
        self.formatter = formatter
        self.line_length = line_length

    @property
    def mode(self) -> black.Mode:
        line_length = UNBOUNDED_LINE_LENGTH if self.line_length is None else self.line_length
        return black.Mode(line_length=line_length)

    def render_interface(self, cls: ClassDef) -> str:
        return self._format("\n".join(_render_class(cls)) + "\n", cls.name)

    def render_implementation(self, cls: ClassDef) -> str:
        return self._format("\n".join(_render_class(cls)) + "\n", cls.name)

    def render_file(self, module: Module) -> str:
        return self._format(render_module(module), module.filename)

    def _format(self, source: str, name: str) -> str:
        if self.formatter is Formatter.PLAIN:
            return source
        try:
            return black.format_str(source, mode=self.mode)
        except black.InvalidInput as e:
            raise RenderError(f"black rejected the rendered source: {e}", filename=name, source=source) from e


__all__ = ["Formatter", "SourceEmitter", "render_imports", "render_module"]
