import io
import os
import warnings

from appdirs import AppDirs

from .actions import ActionCodeGenerator, INDENT, pre
from .config import GenerationConfig, GenerationReport
from .encoding import encode, escape_for_literal
from .errors import ParserGeneratorError, ParserGeneratorWarning
from .utils import (Stopwatch, sanitize_identifier, reindent, has_code,
                    compute_tables_hash, data_is_valid, read_cache, write_cache)

TITLE = "cupemit LALR parser generator"


class Emitter:
    """
    代码生成器（Emitter）根据已经构造好的解析表、产生式列表和用户动作代码，输出生成的解析器所需的全部代码：
    符号常量类、内嵌的打包解析表以及按产生式分派的动作代码。
    所有输入只读，每次生成都返回一份 GenerationReport。
    """
    VERSION = 1

    def __init__(self, config=None):
        self.config = config if config is not None else GenerationConfig()

    def _header(self, out):
        print("#----------------------------------------------------", file=out)
        print(f"# The following code was generated by {TITLE}", file=out)
        print("#----------------------------------------------------", file=out)

    def _constant_name(self, symbol, emitted):
        # 不同的符号名清理后可能得到同一个标识符
        ident = sanitize_identifier(symbol.name)
        other = emitted.setdefault(ident, symbol)
        if other is not symbol:
            raise ParserGeneratorError(
                f"Symbols {other.name!r} and {symbol.name!r} both map to constant {ident!r}"
            )
        return ident

    def symbols(self, out, grammar, report=None):
        """
        输出符号常量类：每个终结符一个常量，按需为每个非终结符一个常量。
        :param out: 输出流。
        :param grammar: Grammar 对象。
        :return: GenerationReport。
        """
        report = report if report is not None else GenerationReport()
        with Stopwatch() as sw:
            self._header(out)
            print(file=out)
            print(file=out)
            print(f"class {self.config.symbol_const_class_name}:", file=out)
            print(f'{INDENT}"""Generated class containing symbol constants."""', file=out)
            emitted = {}
            print(f"{INDENT}# terminals", file=out)
            for term in grammar.terminals:
                print(f"{INDENT}{self._constant_name(term, emitted)} = {term.index}", file=out)
            if self.config.emit_non_terms:
                print(file=out)
                print(f"{INDENT}# non terminals", file=out)
                for nt in grammar.non_terminals:
                    print(f"{INDENT}{self._constant_name(nt, emitted)} = {nt.index}", file=out)
        report.symbols_time = sw.elapsed
        report.terminals = len(grammar.terminals)
        report.non_terminals = len(grammar.non_terminals)
        return report

    def _check_grammar(self, grammar, report, stacklevel):
        if grammar.start_production is None:
            raise ParserGeneratorError("No start production has been specified")
        for i, prod in enumerate(grammar.productions):
            if prod.index != i:
                raise ParserGeneratorError(f"Production {prod} has index {prod.index}, expected {i}")

        report.not_reduced = len(grammar.never_reduced)
        report.unused_term = len(grammar.unused_terminals)
        report.unused_non_term = len(grammar.unused_non_terminals)
        if self.config.nowarn:
            return
        for prod in grammar.never_reduced:
            warnings.warn(f"Production {str(prod)!r} is never reduced", ParserGeneratorWarning, stacklevel=stacklevel)
        for term in grammar.unused_terminals:
            warnings.warn(f"Terminal {term.name!r} is unused", ParserGeneratorWarning, stacklevel=stacklevel)
        for nt in grammar.unused_non_terminals:
            warnings.warn(f"Non terminal {nt.name!r} is unused", ParserGeneratorWarning, stacklevel=stacklevel)

    def production_table(self, grammar):
        """产生式表：每条产生式依次为 (左部非终结符编号, 右部长度)"""
        prod_table = []
        for prod in grammar.productions:
            prod_table.append(prod.lhs.index)
            prod_table.append(prod.rhs_length)
        return prod_table

    def _pack_tables(self, grammar, action_table, reduce_table, report):
        with Stopwatch() as sw:
            prod_table = self.production_table(grammar)
        report.production_table_time = sw.elapsed
        with Stopwatch() as sw:
            act_table = action_table.compress(self.config.compact_reduces)
        report.action_table_time = sw.elapsed
        with Stopwatch() as sw:
            red_table = reduce_table.compress()
        report.goto_table_time = sw.elapsed

        packed = None
        if self.config.cache_id is not None:
            cache_dir = AppDirs("cupemit").user_cache_dir
            cache_file = os.path.join(
                cache_dir,
                f"{self.config.cache_id}-{self.VERSION}-"
                f"{compute_tables_hash(prod_table, act_table, red_table, self.config.compact_reduces)}.json"
            )
            data = read_cache(cache_file)
            if data is not None and data_is_valid(data, prod_table, act_table, red_table):
                packed = data
                report.cache_hit = True

        if packed is None:
            packed = {
                "production_table": encode(prod_table),
                "action_table": encode(act_table),
                "reduce_table": encode(red_table),
            }
            if self.config.cache_id is not None:
                write_cache(cache_dir, cache_file, packed)

        report.table_sizes = dict((key, len(units)) for key, units in packed.items())
        return packed

    def _emit_table(self, out, name, doc, units):
        print(file=out)
        print(f"{INDENT}def {name}(self):", file=out)
        print(f'{INDENT * 2}"""{doc}"""', file=out)
        print(f"{INDENT * 2}return (", file=out)
        for line in escape_for_literal(units):
            print(f"{INDENT * 3}{line}", file=out)

    def parser(self, out, grammar, action_table, reduce_table, report=None, stacklevel=1):
        """
        输出带有内嵌解析表的解析器类以及动作代码类。
        :param out: 输出流。
        :param grammar: Grammar 对象，必须已经指定起始产生式。
        :param action_table: 提供 compress(compact_reduces) 的动作表。
        :param reduce_table: 提供 compress() 的归约-转移表。
        :param stacklevel: 警告指向的调用层级，含义同 warnings.warn，1 表示 parser() 的调用者。
        :return: GenerationReport。
        """
        config = self.config
        report = report if report is not None else GenerationReport()
        ind = INDENT
        name = config.parser_class_name
        with Stopwatch() as total:
            self._check_grammar(grammar, report, stacklevel + 2)
            packed = self._pack_tables(grammar, action_table, reduce_table, report)

            self._header(out)
            print("from typing import List, cast", file=out)
            print(file=out)
            print("from cupemit.runtime import LRParser, ParseTableError, Symbol", file=out)
            for imp in config.import_list:
                print(f"import {imp}" if " " not in imp else imp, file=out)

            print(file=out)
            print(file=out)
            print(f"class {name}(LRParser):", file=out)
            print(f'{ind}"""{TITLE} generated parser."""', file=out)
            print(file=out)
            if config.suppress_scanner:
                print(f"{ind}def __init__(self):", file=out)
                print(f'{ind * 2}"""Default constructor."""', file=out)
                print(f"{ind * 2}super().__init__()", file=out)
            else:
                print(f"{ind}def __init__(self, scanner=None, symbol_factory=None):", file=out)
                print(f'{ind * 2}"""Default constructor, optionally setting the default scanner."""', file=out)
                print(f"{ind * 2}super().__init__(scanner, symbol_factory)", file=out)

            self._emit_table(out, "production_table", "Return production table",
                             packed["production_table"])
            self._emit_table(out, "action_table", "Return action table",
                             packed["action_table"])
            self._emit_table(out, "reduce_table", "Return reduce-goto table",
                             packed["reduce_table"])

            print(file=out)
            print(f"{ind}def init_actions(self):", file=out)
            print(f'{ind * 2}"""Action encapsulation object initializer."""', file=out)
            print(f"{ind * 2}self.action_obj = {ActionCodeGenerator.class_name}(self)", file=out)
            print(file=out)
            print(f"{ind}def do_action(self, act_num, stack):", file=out)
            print(f'{ind * 2}"""Invoke a user supplied parse action."""', file=out)
            print(f"{ind * 2}return self.action_obj.{pre('do_action')}(act_num, self, stack)", file=out)
            print(file=out)
            print(f"{ind}def start_state(self):", file=out)
            print(f"{ind * 2}return {config.start_state}", file=out)
            print(file=out)
            print(f"{ind}def start_production(self):", file=out)
            print(f"{ind * 2}return {grammar.start_production.index}", file=out)
            print(file=out)
            print(f"{ind}def EOF_sym(self):", file=out)
            print(f"{ind * 2}return {grammar.eof.index}", file=out)
            print(file=out)
            print(f"{ind}def error_sym(self):", file=out)
            print(f"{ind * 2}return {grammar.error.index}", file=out)

            if has_code(config.init_code):
                print(file=out)
                print(f"{ind}def user_init(self):", file=out)
                print(f'{ind * 2}"""User initialization code."""', file=out)
                print(reindent(config.init_code, ind * 2), file=out)
            if has_code(config.scan_code):
                print(file=out)
                print(f"{ind}def scan(self):", file=out)
                print(f'{ind * 2}"""Scan to get the next Symbol."""', file=out)
                print(reindent(config.scan_code, ind * 2), file=out)
            if has_code(config.parser_code):
                print(file=out)
                print(reindent(config.parser_code, ind), file=out)

            with Stopwatch() as sw:
                ActionCodeGenerator(config).emit(out, grammar)
            report.action_code_time = sw.elapsed
        report.parser_time = total.elapsed
        report.productions = len(grammar.productions)
        return report


def emit_symbols_to_string(grammar, config=None):
    out = io.StringIO()
    report = Emitter(config).symbols(out, grammar)
    return out.getvalue(), report


def emit_parser_to_string(grammar, action_table, reduce_table, config=None):
    out = io.StringIO()
    report = Emitter(config).parser(out, grammar, action_table, reduce_table, stacklevel=2)
    return out.getvalue(), report
