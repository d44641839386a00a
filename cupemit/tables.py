"""
内存中的动作表与归约-转移表。

两者都只通过 compress() 暴露给代码生成器。压缩后的布局::

    [row_offset(state 0), ..., row_offset(state n-1),
     sym, entry, sym, entry, ..., -1, default,      # state 0
     ...]

动作表条目的编码：出错为 0，移进到状态 s 为 s + 1，按产生式 p 归约为 -(p + 1)。
归约-转移表的默认值为 -1（没有转移）。
"""
from typing import List

from .errors import ParserGeneratorError

ERROR = 0


def shift(state):
    return state + 1


def reduce(prod):
    return -(prod + 1)


def _compress_rows(rows, defaults) -> List[int]:
    result = [0] * len(rows)
    for st, (row, default) in enumerate(zip(rows, defaults)):
        result[st] = len(result)
        for sym in sorted(row):
            result.append(sym)
            result.append(row[sym])
        result.append(-1)
        result.append(default)
    return result


class ParseActionTable:
    """(状态 × 终结符) 的动作矩阵，按状态保存稀疏行"""

    def __init__(self, num_states, num_terminals):
        self.num_terminals = num_terminals
        self.rows = [{} for _ in range(num_states)]

    @property
    def num_states(self):
        return len(self.rows)

    def _set(self, state, term, entry):
        if not 0 <= term < self.num_terminals:
            raise ParserGeneratorError(f"Terminal index {term} out of range")
        row = self.rows[state]
        if term in row and row[term] != entry:
            raise ParserGeneratorError(f"Conflicting actions in state {state} on terminal {term}")
        row[term] = entry

    def set_shift(self, state, term, to_state):
        self._set(state, term, shift(to_state))

    def set_reduce(self, state, term, prod):
        self._set(state, term, reduce(prod))

    def default_reduce(self, state):
        """返回该状态中出现最多的归约条目，没有归约时返回 ERROR"""
        counts = {}
        for entry in self.rows[state].values():
            if entry < 0:
                counts[entry] = counts.get(entry, 0) + 1
        if not counts:
            return ERROR
        # 次数相同时取编号最小的产生式
        return max(counts, key=lambda e: (counts[e], e))

    def compress(self, compact_reduces) -> List[int]:
        rows = []
        defaults = []
        for st, row in enumerate(self.rows):
            default = ERROR
            if compact_reduces:
                default = self.default_reduce(st)
                if default != ERROR:
                    row = dict((t, e) for t, e in row.items() if e != default)
            rows.append(row)
            defaults.append(default)
        return _compress_rows(rows, defaults)


class ParseReduceTable:
    """(状态 × 非终结符) 的稀疏转移矩阵"""

    def __init__(self, num_states, num_non_terminals):
        self.num_non_terminals = num_non_terminals
        self.rows = [{} for _ in range(num_states)]

    @property
    def num_states(self):
        return len(self.rows)

    def set_goto(self, state, non_term, to_state):
        if not 0 <= non_term < self.num_non_terminals:
            raise ParserGeneratorError(f"Non terminal index {non_term} out of range")
        self.rows[state][non_term] = to_state

    def compress(self) -> List[int]:
        return _compress_rows(self.rows, [-1] * len(self.rows))
