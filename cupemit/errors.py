class ParserGeneratorError(Exception):
    pass


class ParserGeneratorWarning(Warning):
    pass


class ParseTableError(Exception):
    """生成的解析器内部表与动作代码不一致时抛出（致命错误，不可恢复）"""
    def __init__(self, message, act_num=None):
        self.message = message
        self.act_num = act_num

    def get_act_num(self):
        return self.act_num

    def __str__(self):
        return self.message

    def __repr__(self):
        return f'ParseTableError({self.message!r}, {self.act_num!r})'
