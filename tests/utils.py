from cupemit import Grammar, ParseActionTable, ParseReduceTable
from cupemit.runtime import Symbol


class FixedTable:
    """compress() 直接返回给定数组的表"""
    def __init__(self, data):
        self.data = data
        self.calls = []

    def compress(self, *args):
        self.calls.append(args)
        return list(self.data)


def expr_grammar():
    """
    $START   ::= program:start_val EOF
    program  ::= expr:e opt_semi
    expr     ::= expr:a PLUS expr:b
    expr     ::= NUMBER:n
    opt_semi ::=
    opt_semi ::= SEMI
    NT$0     ::= expr PLUS               (派生产生式，基产生式为 2)
    expr     ::= expr PLUS expr          (派生产生式，基产生式为 2，中间结果位于 2)
    """
    g = Grammar([("NUMBER", "int"), "PLUS", "SEMI"])
    g.add_non_terminal("$START", "list")
    g.add_non_terminal("program", "list")
    g.add_non_terminal("expr", "int")
    g.add_non_terminal("opt_semi")
    g.add_non_terminal("NT$0", "int")

    start = g.add_production("$START", [("program", "start_val"), "EOF"], "RESULT = start_val")
    g.add_production("program", [("expr", "e"), "opt_semi"], "RESULT = [e]")
    plus = g.add_production("expr", [("expr", "a"), "PLUS", ("expr", "b")], "RESULT = a + b")
    g.add_production("expr", [("NUMBER", "n")], "RESULT = n")
    g.add_production("opt_semi", [])
    g.add_production("opt_semi", ["SEMI"])
    g.add_derived_production("NT$0", ["expr", "PLUS"], plus, action="RESULT = a * 10")
    g.add_derived_production("expr", ["expr", "PLUS", "expr"], plus, 2, action="RESULT = RESULT + a")
    g.set_start(start)
    return g


def expr_tables(g):
    action = ParseActionTable(4, len(g.terminals))
    action.set_shift(0, 2, 1)
    action.set_reduce(1, 0, 3)
    action.set_reduce(1, 3, 3)
    action.set_reduce(1, 4, 3)
    action.set_shift(2, 3, 3)
    action.set_reduce(2, 0, 4)
    reduce = ParseReduceTable(4, len(g.non_terminals))
    reduce.set_goto(0, 2, 2)
    reduce.set_goto(0, 1, 3)
    return action, reduce


def load_generated(source):
    namespace = {}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


def sym(value=None, left=-1, right=-1, sym_id=0):
    return Symbol(sym_id, value, left, right)
