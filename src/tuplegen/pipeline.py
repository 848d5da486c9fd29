"""
Generation pipeline.

    build -> emit interfaces / implementations -> render -> write

Both files are rendered in memory before either is written, so a failure
anywhere leaves the output directory untouched.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .backends import SourceEmitter
from .builder import build
from .config import GeneratorConfig
from .emitters import emit_implementations, emit_interfaces
from .logging import get_logger
from .model import FamilyModel
from .writer import FileSink, SourceWriter

logger = get_logger(__name__)


@dataclass
class RenderedFamily:
    family: FamilyModel
    interfaces: str
    implementations: str


@dataclass
class GenerationResult:
    """Outcome of a successful run."""

    family: FamilyModel
    interfaces_path: Path
    implementations_path: Path


def make_writer(config: GeneratorConfig) -> SourceWriter:
    emitter = SourceEmitter(formatter=config.formatter, line_length=config.line_length)
    return SourceWriter(emitter, header=config.header)


def render_family(config: GeneratorConfig, family: Optional[FamilyModel] = None) -> RenderedFamily:
    """
    Build (unless given) and render the family described by ``config``.

    Nothing touches the filesystem here.

    Raises:
        InvalidArity: if ``config.max_arity`` cannot be generated
        ModelInconsistency: if an emitter refuses the model
        RenderError, AnchorNotFound: if rendering fails
    """
    config.validate()
    if family is None:
        family = build(config.max_arity)

    writer = make_writer(config)
    interfaces = emit_interfaces(family, config.runtime_module, name=config.interfaces_module)
    implementations = emit_implementations(
        family,
        config.runtime_module,
        interfaces_module=config.interfaces_module,
        name=config.implementations_module,
    )
    return RenderedFamily(
        family=family,
        interfaces=writer.write_source(interfaces),
        implementations=writer.write_source(implementations),
    )


def generate(config: GeneratorConfig, sink: Optional[FileSink] = None) -> GenerationResult:
    """
    Run the whole pipeline and write both files.

    Args:
        config: What to generate and where
        sink: File sink to write through (a default FileSink if None)

    Returns:
        GenerationResult naming the written files

    Raises:
        ConfigError: if no output directory is configured
        WriteError: if a file cannot be written
    """
    output_dir = config.require_output_dir()
    logger.info("Generating tuple family up to arity %d into %s", config.max_arity, output_dir)
    rendered = render_family(config)

    sink = sink or FileSink()
    interfaces_path = sink.write(config.interfaces_path, rendered.interfaces)
    implementations_path = sink.write(config.implementations_path, rendered.implementations)

    logger.info("Generated %d tuple types", len(rendered.family))
    return GenerationResult(
        family=rendered.family,
        interfaces_path=interfaces_path,
        implementations_path=implementations_path,
    )
