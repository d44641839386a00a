from .errors import ParserGeneratorError, ParserGeneratorWarning, ParseTableError
from .grammar import Grammar, Terminal, NonTerminal, SymbolPart, Production, DerivedProduction
from .config import GenerationConfig, GenerationReport
from .tables import ParseActionTable, ParseReduceTable
from .emitter import Emitter, emit_symbols_to_string, emit_parser_to_string

__version__ = '0.1.0'

__all__ = [
    "Emitter", "emit_symbols_to_string", "emit_parser_to_string",
    "GenerationConfig", "GenerationReport",
    "Grammar", "Terminal", "NonTerminal", "SymbolPart", "Production", "DerivedProduction",
    "ParseActionTable", "ParseReduceTable",
    "ParserGeneratorError", "ParserGeneratorWarning", "ParseTableError",
]
