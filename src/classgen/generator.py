# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation workflow: extensions, schemas, validation, rendering.

:meth:`ClassGenerator.generate` runs the stages in a fixed order and stops at
the first failure::

    IDLE -> CHECKING_PATHS -> LOADING_EXTENSIONS -> PARSING_SCHEMAS
         -> VALIDATING -> RENDERING -> DONE

Any failing stage moves the generator to ``FAILED``. Files written by earlier
renders are left in place.
"""

from __future__ import annotations

import enum
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from classgen.compiler.loader import load_schemas, schema_files
from classgen.compiler.registry import validate
from classgen.errors import PathReason, PathValidationError
from classgen.extensions.bridge import ExtensionBridge
from classgen.logging_config import get_logger
from classgen.model.entities import ParseOptions
from classgen.rendering.engine import TemplateRenderer

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############


class GeneratorState(enum.Enum):
    """Progress of a generation run."""

    IDLE = "idle"
    CHECKING_PATHS = "checking-paths"
    LOADING_EXTENSIONS = "loading-extensions"
    PARSING_SCHEMAS = "parsing-schemas"
    VALIDATING = "validating"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Outcome of a successful run.

    Attributes:
        output_directory: Where the generated files were written.
        written_files: Generated files in data type order.
        predefined_types: The predefined type names registered by extensions.
    """

    output_directory: Path
    written_files: list[Path] = field(default_factory=list)
    predefined_types: tuple[str, ...] = ()


class ClassGenerator:
    """Generates one output file per data type found in the schema documents."""

    def __init__(
        self,
        schemas_directory: Path,
        template_file: Path,
        *,
        output_directory: Path | None = None,
        extensions_directory: Path | None = None,
        parse_options: ParseOptions | None = None,
        remove_output_files: bool = False,
        output_extension: str | None = None,
    ) -> None:
        self.schemas_directory = Path(schemas_directory)
        self.template_file = Path(template_file)
        self.output_directory = Path(output_directory) if output_directory is not None else None
        self.extensions_directory = Path(extensions_directory) if extensions_directory is not None else None
        self.parse_options = parse_options or ParseOptions()
        self.remove_output_files = remove_output_files
        self.output_extension = output_extension
        self.state = GeneratorState.IDLE
        self.written_files: list[Path] = []

    def generate(self) -> GenerationResult:
        """Run every stage and write the generated files.

        Returns:
            A :class:`GenerationResult` describing the written files.

        Raises:
            PathValidationError: If an input or output location is unusable.
            ExtensionLoadError: If an extension script raises while loaded.
            SchemaParseError: If a schema document is malformed.
            TypeValidationError: If the data types are inconsistent.
            RenderError: If rendering a data type fails.
        """
        self.written_files = []
        try:
            self._enter(GeneratorState.CHECKING_PATHS)
            output_directory = self._prepare_paths()

            self._enter(GeneratorState.LOADING_EXTENSIONS)
            bridge = self._load_extensions()

            self._enter(GeneratorState.PARSING_SCHEMAS)
            schema = load_schemas(schema_files(self.schemas_directory), self.parse_options)

            self._enter(GeneratorState.VALIDATING)
            data_types = validate(schema.data_types, bridge.predefined_types)

            self._enter(GeneratorState.RENDERING)
            if output_directory is None:
                output_directory = Path(tempfile.mkdtemp(prefix="classgen-"))
                logger.info("Using temporary output directory %s", output_directory)
            renderer = TemplateRenderer(self.template_file, bridge)
            suffix = self._output_suffix()
            for data_type in data_types:
                output = renderer.render(data_type)
                output_file = output_directory / f"{data_type.name}{suffix}"
                output_file.write_text(output, encoding="utf-8")
                self.written_files.append(output_file)
                logger.debug("Wrote %s", output_file)
        except Exception:
            self.state = GeneratorState.FAILED
            raise

        self._enter(GeneratorState.DONE)
        logger.info("Generated %d file(s) in %s", len(self.written_files), output_directory)
        return GenerationResult(
            output_directory=output_directory,
            written_files=list(self.written_files),
            predefined_types=bridge.predefined_types,
        )

    # ################
    # Implementation
    # ################

    def _enter(self, state: GeneratorState) -> None:
        logger.debug("Generator state: %s -> %s", self.state.value, state.value)
        self.state = state

    def _output_suffix(self) -> str:
        if self.output_extension is None:
            return self.template_file.suffix
        if self.output_extension and not self.output_extension.startswith("."):
            return f".{self.output_extension}"
        return self.output_extension

    def _load_extensions(self) -> ExtensionBridge:
        bridge = ExtensionBridge()
        if self.extensions_directory is not None:
            scripts = bridge.load_directory(self.extensions_directory)
            logger.info("Loaded %d extension script(s)", len(scripts))
        bridge.freeze()
        return bridge

    def _prepare_paths(self) -> Path | None:
        """Check every location and return the output directory, if one was given.

        The temporary directory used without one is only created once rendering starts.
        """
        _check_directory("Schemas directory", self.schemas_directory, must_have_entries=True)
        _check_file("Template file", self.template_file)
        if self.extensions_directory is not None:
            _check_directory("Extensions directory", self.extensions_directory)

        if self.output_directory is None:
            return None

        output_directory = self.output_directory
        if not output_directory.exists():
            output_directory.mkdir(parents=True)
            return output_directory
        if not output_directory.is_dir():
            raise PathValidationError("Output directory", PathReason.NOT_A_DIRECTORY, output_directory)

        existing = sorted(output_directory.iterdir())
        if existing:
            if not self.remove_output_files:
                raise PathValidationError("Output directory", PathReason.NOT_EMPTY, output_directory)
            for entry in existing:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            logger.info("Removed %d file(s) from %s", len(existing), output_directory)
        return output_directory


def _check_directory(role: str, path: Path, *, must_have_entries: bool = False) -> None:
    if not path.exists():
        raise PathValidationError(role, PathReason.DOES_NOT_EXIST, path)
    if not path.is_dir():
        raise PathValidationError(role, PathReason.NOT_A_DIRECTORY, path)
    if must_have_entries and not any(path.iterdir()):
        raise PathValidationError(role, PathReason.IS_EMPTY, path)


def _check_file(role: str, path: Path) -> None:
    if not path.exists():
        raise PathValidationError(role, PathReason.DOES_NOT_EXIST, path)
    if not path.is_file():
        raise PathValidationError(role, PathReason.NOT_A_FILE, path)
