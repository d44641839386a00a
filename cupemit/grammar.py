from .errors import ParserGeneratorError


class GrammarSymbol:
    """文法符号的基类（终结符与非终结符共用）"""

    def __init__(self, name, index, stack_type=None, use_count=None):
        self.name = name
        self.index = index            # 同类符号中的稠密编号（0..count-1）
        self.stack_type = stack_type  # 声明的值类型，None 表示不携带值
        self.use_count = use_count    # 在产生式中被引用的次数（未知时为 None）

    def is_non_term(self):
        return False

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.index})"


class Terminal(GrammarSymbol):
    pass


class NonTerminal(GrammarSymbol):
    def is_non_term(self):
        return True


class SymbolPart:
    """产生式右部的一个条目：底层符号 + 可选的用户标签"""

    def __init__(self, symbol, label=None):
        self.symbol = symbol
        self.label = label

    @property
    def stack_type(self):
        return self.symbol.stack_type

    def __repr__(self):
        if self.label is None:
            return self.symbol.name
        return f"{self.symbol.name}:{self.label}"


class Production:
    def __init__(self, index, lhs, rhs, action=None, reduced=None):
        self.index = index
        self.lhs = lhs            # NonTerminal
        self.rhs = list(rhs)      # SymbolPart 列表
        self.action = action      # 用户动作代码（原样拼接）
        self.reduced = reduced    # 归约次数（由上游统计，未知时为 None）

    @property
    def rhs_length(self):
        return len(self.rhs)

    @property
    def base_production(self):
        return self

    @property
    def intermediate_result(self):
        return -1

    @property
    def is_derived(self):
        return False

    def __str__(self):
        rhs = " ".join(repr(part) for part in self.rhs)
        return f"{self.lhs.name} ::= {rhs}".rstrip()

    def __repr__(self):
        return f"Production({self})"

    def __len__(self):
        return len(self.rhs)


class DerivedProduction(Production):
    """
    拆分中间动作（mid-rule action）后得到的合成产生式链中的最后一个环节。
    标签与类型的解析走基产生式（base）的右部，栈偏移的计算使用自身右部的长度。
    :param base: 原始（基）产生式。
    :param intermediate_result: 之前的环节已经消耗的基产生式右部符号个数，-1 表示没有中间结果。
    """

    def __init__(self, index, lhs, rhs, base, intermediate_result=-1, action=None, reduced=None):
        super().__init__(index, lhs, rhs, action, reduced)
        # 中间结果的栈偏移为 len(rhs) - intermediate_result，必须落在自身右部之内
        if (intermediate_result < -1 or intermediate_result > len(base.rhs)
                or (intermediate_result != -1 and intermediate_result >= len(self.rhs))):
            raise ParserGeneratorError(
                f"Intermediate result index {intermediate_result} out of range for {base}"
            )
        self._base = base
        self._intermediate_result = intermediate_result

    @property
    def base_production(self):
        return self._base

    @property
    def intermediate_result(self):
        return self._intermediate_result

    @property
    def is_derived(self):
        return True

    def __repr__(self):
        return f"DerivedProduction({self}, base={self._base.index})"


def resolve_part(prod, i):
    """
    获取产生式 prod 右部第 i 个位置对应的条目。
    对于派生产生式，总是从基产生式的右部中查找（标签与类型都定义在那里）。
    """
    base = prod.base_production
    if not 0 <= i < len(base.rhs):
        raise ParserGeneratorError(
            f"Right hand side position {i} out of range for base production {base}"
        )
    return base.rhs[i]


class Grammar:
    """
    终结符、非终结符与产生式的注册表。
    所有编号在各自的类别内稠密且连续；EOF 与 error 两个终结符总是最先注册。
    """
    EOF_NAME = "EOF"
    ERROR_NAME = "error"

    def __init__(self, terminals=()):
        self.terminals = []       # 按编号排列的终结符
        self.non_terminals = []   # 按编号排列的非终结符
        self.productions = []     # 按编号排列的产生式
        self._names = {}          # 名称 -> 符号
        self.start_production = None

        self.eof = self.add_terminal(self.EOF_NAME)
        self.error = self.add_terminal(self.ERROR_NAME)
        for t in terminals:
            if isinstance(t, tuple):
                self.add_terminal(*t)
            else:
                self.add_terminal(t)

    def _check_name(self, name):
        if name in self._names:
            raise ParserGeneratorError(f"Symbol {name!r} is already defined")

    def add_terminal(self, name, stack_type=None, use_count=None):
        self._check_name(name)
        t = Terminal(name, len(self.terminals), stack_type, use_count)
        self.terminals.append(t)
        self._names[name] = t
        return t

    def add_non_terminal(self, name, stack_type=None, use_count=None):
        if name in self._names and not self._names[name].is_non_term():
            raise ParserGeneratorError(f"Illegal rule name {name!r}")
        self._check_name(name)
        nt = NonTerminal(name, len(self.non_terminals), stack_type, use_count)
        self.non_terminals.append(nt)
        self._names[name] = nt
        return nt

    def symbol(self, name):
        try:
            return self._names[name]
        except KeyError:
            raise ParserGeneratorError(f"Symbol {name!r} doesn't exist")

    def _parts(self, rhs):
        parts = []
        for entry in rhs:
            if isinstance(entry, SymbolPart):
                parts.append(entry)
            elif isinstance(entry, tuple):
                name, label = entry
                parts.append(SymbolPart(self.symbol(name), label))
            else:
                parts.append(SymbolPart(self.symbol(entry)))
        return parts

    def _lhs(self, name):
        lhs = self.symbol(name)
        if not lhs.is_non_term():
            raise ParserGeneratorError(f"Illegal rule name {name!r}")
        return lhs

    def add_production(self, lhs, rhs, action=None, reduced=None):
        """
        注册一条产生式。
        :param lhs: 左部非终结符名称。
        :param rhs: 右部条目列表，每项为符号名、(符号名, 标签) 或 SymbolPart。
        :param action: 用户动作代码（可选）。
        :return: 新建的 Production。
        """
        p = Production(len(self.productions), self._lhs(lhs), self._parts(rhs), action, reduced)
        self.productions.append(p)
        return p

    def add_derived_production(self, lhs, rhs, base, intermediate_result=-1, action=None, reduced=None):
        p = DerivedProduction(len(self.productions), self._lhs(lhs), self._parts(rhs),
                              base, intermediate_result, action, reduced)
        self.productions.append(p)
        return p

    def set_start(self, prod):
        if self.start_production is not None:
            raise ParserGeneratorError(
                f"Start production already specified: {self.start_production}"
            )
        if prod not in self.productions:
            raise ParserGeneratorError(f"{prod!r} is not a production of this grammar")
        self.start_production = prod

    @property
    def unused_terminals(self):
        return [t for t in self.terminals[2:] if t.use_count == 0]

    @property
    def unused_non_terminals(self):
        return [nt for nt in self.non_terminals if nt.use_count == 0]

    @property
    def never_reduced(self):
        return [p for p in self.productions if p.reduced == 0]
