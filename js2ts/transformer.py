import os
from pathlib import Path
from typing import Any, List, Optional

from js2ts.annotator import TreeAnnotator
from js2ts.declarations import extract_type_definitions
from js2ts.errors import InputNotFoundError
from js2ts.helpers import ensure_directory, get_output_file_path
from js2ts.lang.typescript import parse_module
from js2ts.logger import Js2TsLogger as logger, verbose_log
from js2ts.models import SymbolTable, TransformationResult
from js2ts.scanner import find_javascript_files, find_type_definition_files
from js2ts.settings import OUTPUT_DIR_NAME, ConversionSettings
from js2ts.syntax import generate


class JsToTsTransformer:
    """
    Convert a JavaScript file or directory to TypeScript.

    One ``transform()`` call is one run: the symbol table is built once from
    every ``.d.ts`` file found next to the input, then each source file is
    annotated and written on its own. A missing input or a broken
    declaration file aborts the run; anything going wrong with a single
    source file is recorded in that file's result and the run continues.
    """

    def __init__(self, settings: ConversionSettings) -> None:
        self.settings = settings
        self.type_definitions: SymbolTable = SymbolTable()

    def _log(self, event: str, **data: Any) -> None:
        verbose_log(event, self.settings.verbose, **data)

    def output_root(self, is_directory: bool) -> str:
        if self.settings.output:
            return self.settings.output
        return os.path.join(self._input_root(is_directory), OUTPUT_DIR_NAME)

    def _input_root(self, is_directory: bool) -> str:
        if is_directory:
            return self.settings.input
        return os.path.dirname(self.settings.input) or "."

    def transform(self) -> List[TransformationResult]:
        input_path = self.settings.input
        if not os.path.exists(input_path):
            raise InputNotFoundError(input_path)

        is_directory = os.path.isdir(input_path)
        input_root = self._input_root(is_directory)
        output_root = self.output_root(is_directory)
        ensure_directory(output_root)

        self._log("finding type definitions", root=input_root)
        definition_files = find_type_definition_files(input_root)
        self._log("type definition files found", count=len(definition_files))

        self.type_definitions = extract_type_definitions(definition_files)
        self._log("type definitions extracted", count=len(self.type_definitions))

        sources = (
            find_javascript_files(input_path, self.settings.ignore)
            if is_directory else [input_path]
        )
        self._log("javascript files found", count=len(sources))

        results: List[TransformationResult] = []
        for source in sources:
            try:
                result = self.transform_file(source, input_root, output_root)
            except Exception as exc:
                logger.warning("conversion failed", path=source, error=str(exc))
                result = TransformationResult(
                    original_path=source,
                    new_path="",
                    success=False,
                    error=str(exc),
                )
            results.append(result)
        return results

    def transform_file(self, file_path: str, input_root: str, output_root: str) -> TransformationResult:
        """Annotate one source file and write it under *output_root*."""
        self._log("transforming file", path=file_path)

        code = Path(file_path).read_text(encoding="utf-8")
        program = parse_module(code, file_path)
        TreeAnnotator(self.type_definitions, file_path).annotate(program)
        output = generate(program)

        new_path = get_output_file_path(file_path, input_root, output_root)
        ensure_directory(os.path.dirname(new_path))
        Path(new_path).write_text(output, encoding="utf-8")

        if not self.settings.keep_original:
            os.remove(file_path)
            self._log("original removed", path=file_path)

        return TransformationResult(original_path=file_path, new_path=new_path, success=True)


def convert_js_to_ts(settings: Optional[ConversionSettings] = None, **kwargs: Any) -> List[TransformationResult]:
    """
    Convert JavaScript to TypeScript.

    Pass a ``ConversionSettings`` instance, or the same fields as keyword
    arguments (``convert_js_to_ts(input="src", keep_original=False)``).
    """
    if settings is None:
        settings = ConversionSettings(**kwargs)
    elif kwargs:
        settings = settings.model_copy(update=kwargs)
    return JsToTsTransformer(settings).transform()
