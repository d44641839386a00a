"""
生成的解析器在运行时依赖的支持代码：符号、符号工厂以及解析器基类。
移进/归约的驱动循环不在此处实现。
"""
from .encoding import decode_string
from .errors import ParseTableError

__all__ = ["Symbol", "SymbolFactory", "LRParser", "ParseTableError"]


class Symbol:
    """封装解析栈中的一个符号（编号、值以及左右位置）"""

    def __init__(self, sym, value=None, left=-1, right=-1, name=None):
        self.sym = sym
        self.value = value
        self.left = left
        self.right = right
        self.name = name

    def __repr__(self):
        return f"Symbol({self.name or self.sym!r}, {self.value!r}, left={self.left}, right={self.right})"

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return (self.sym == other.sym and self.value == other.value
                and self.left == other.left and self.right == other.right)


class SymbolFactory:
    """由归约动作调用，用来构造新的符号"""

    def new_symbol(self, name, sym, left=None, right=None, value=None):
        """
        :param left: 最左侧的来源符号，新符号的左位置取自它的 left。
        :param right: 最右侧的来源符号，新符号的右位置取自它的 right。
        """
        lpos = left.left if left is not None else -1
        rpos = right.right if right is not None else -1
        return Symbol(sym, value, lpos, rpos, name)


class LRParser:
    """
    生成的解析器类的基类。
    :param scanner: 提供 next_token() 的扫描器（可选）。
    :param symbol_factory: 符号工厂，缺省时使用 SymbolFactory。
    """

    def __init__(self, scanner=None, symbol_factory=None):
        self.scanner = scanner
        self.symbol_factory = symbol_factory if symbol_factory is not None else SymbolFactory()
        self._done_parsing = False
        self.init_actions()

    def init_actions(self):
        pass

    def get_symbol_factory(self):
        return self.symbol_factory

    def done_parsing(self):
        self._done_parsing = True

    @property
    def is_done(self):
        return self._done_parsing

    @staticmethod
    def unpack_table(text):
        return decode_string(text)

    def production_tab(self):
        return self.unpack_table(self.production_table())

    def action_tab(self):
        return self.unpack_table(self.action_table())

    def reduce_tab(self):
        return self.unpack_table(self.reduce_table())

    def user_init(self):
        pass

    def scan(self):
        if self.scanner is None:
            raise RuntimeError("No scanner has been provided")
        return self.scanner.next_token()
