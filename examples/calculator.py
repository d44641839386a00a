import sys

from cupemit import Emitter, GenerationConfig, Grammar, ParseActionTable, ParseReduceTable


# ----------------------------
# 1. Describe the grammar
# ----------------------------
def build_grammar():
    g = Grammar([("NUMBER", "int"), "PLUS", "TIMES"])
    g.add_non_terminal("$START", "int")
    g.add_non_terminal("expr", "int")
    g.add_non_terminal("term", "int")

    start = g.add_production("$START", [("expr", "e"), "EOF"], "RESULT = e")
    g.add_production("expr", [("expr", "e"), "PLUS", ("term", "t")], "RESULT = e + t")
    g.add_production("expr", [("term", "t")], "RESULT = t")
    g.add_production("term", [("term", "t"), "TIMES", ("NUMBER", "n")], "RESULT = t * n")
    g.add_production("term", [("NUMBER", "n")], "RESULT = n")
    g.set_start(start)
    return g


# ----------------------------
# 2. Parse tables (normally computed by the LALR construction)
# ----------------------------
def build_tables(g):
    NUMBER, PLUS, TIMES = 2, 3, 4
    EXPR, TERM = 1, 2
    action = ParseActionTable(9, len(g.terminals))
    action.set_shift(0, NUMBER, 3)
    action.set_shift(1, PLUS, 4)
    action.set_shift(1, 0, 8)
    for term in (0, PLUS):
        action.set_reduce(2, term, 2)
        action.set_reduce(3, term, 4)
        action.set_reduce(5, term, 1)
        action.set_reduce(7, term, 3)
    action.set_shift(2, TIMES, 6)
    action.set_reduce(3, TIMES, 4)
    action.set_shift(4, NUMBER, 3)
    action.set_shift(5, TIMES, 6)
    action.set_shift(6, NUMBER, 7)
    action.set_reduce(7, TIMES, 3)
    action.set_reduce(8, 0, 0)

    reduce = ParseReduceTable(9, len(g.non_terminals))
    reduce.set_goto(0, EXPR, 1)
    reduce.set_goto(0, TERM, 2)
    reduce.set_goto(4, TERM, 5)
    return action, reduce


# ----------------------------
# 3. Emit the generated modules
# ----------------------------
def main(out_dir="."):
    g = build_grammar()
    action, reduce = build_tables(g)
    emitter = Emitter(GenerationConfig(
        parser_class_name="CalcParser",
        emit_non_terms=True,
        compact_reduces=True,
    ))
    with open(f"{out_dir}/calc_sym.py", "w") as f:
        emitter.symbols(f, g)
    with open(f"{out_dir}/calc_parser.py", "w") as f:
        report = emitter.parser(f, g, action, reduce)
    print(f"productions={report.productions} tables={report.table_sizes}")


if __name__ == "__main__":
    main(*sys.argv[1:])
