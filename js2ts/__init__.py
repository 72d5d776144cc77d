from js2ts.annotator import TreeAnnotator, annotate
from js2ts.declarations import extract_type_definitions
from js2ts.errors import (
    DeclarationParseError,
    InputNotFoundError,
    Js2TsError,
    ParseError,
    SourceParseError,
)
from js2ts.models import (
    ParsedSignature,
    SymbolEntry,
    SymbolKind,
    SymbolTable,
    TransformationResult,
)
from js2ts.settings import ConversionSettings, load_settings
from js2ts.transformer import JsToTsTransformer, convert_js_to_ts

__all__ = [
    "ConversionSettings",
    "DeclarationParseError",
    "InputNotFoundError",
    "Js2TsError",
    "JsToTsTransformer",
    "ParseError",
    "ParsedSignature",
    "SourceParseError",
    "SymbolEntry",
    "SymbolKind",
    "SymbolTable",
    "TransformationResult",
    "TreeAnnotator",
    "annotate",
    "convert_js_to_ts",
    "extract_type_definitions",
    "load_settings",
]
