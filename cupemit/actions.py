"""
为每条产生式生成归约动作方法，并生成按产生式编号分派的 do_action。

生成的方法读取解析栈（栈顶在列表末尾，偏移 1 表示栈顶），
绑定带标签的右部符号及其值和左右位置，拼接用户动作代码，
最后构造归约得到的新符号。
"""
from typing import List

from .grammar import resolve_part
from .utils import reindent, has_code

PREFIX = "CUP_"
INDENT = "    "


def pre(name):
    """给生成代码中的内部名称加上前缀，避免与用户代码冲突"""
    return PREFIX + name


class ActionCodeGenerator:
    """
    :param config: GenerationConfig，使用其中的 lr_values、generic_stack 与 action_code。
    """
    class_name = pre("actions")

    def __init__(self, config):
        self.config = config

    def stack_elem(self, index):
        """距栈顶偏移为 index 的栈元素（栈顶偏移为 1）"""
        if index == 1:
            access = f"{pre('stack')}[-1]"
        else:
            access = f"{pre('stack')}[{pre('size')} - {index}]"
        if self.config.generic_stack:
            return access
        return f"cast(Symbol, {access})"

    def method_name(self, prod):
        return pre(f"act_{prod.index}")

    def production_body(self, prod, start_prod) -> List[str]:
        """生成单条产生式的方法体（不含缩进）"""
        lines = []
        lr_values = self.config.lr_values
        k = prod.rhs_length
        lhs_type = prod.lhs.stack_type

        if lhs_type is not None:
            last_result = prod.intermediate_result
            result = "None"
            if last_result != -1:
                result = f"{self.stack_elem(k - last_result)}.value"
            lines.append(f"RESULT: {lhs_type} = {result}")

        bound = set()
        # 从最右侧向最左侧遍历右部
        for i in range(k - 1, -1, -1):
            symbvar = None
            if not prod.is_derived and lr_values and (i == 0 or i == k - 1):
                symbvar = pre("right") if i == k - 1 else pre("left")
                lines.append(f"{symbvar} = {self.stack_elem(k - i)}")
                bound.add(symbvar)

            part = resolve_part(prod, i)
            if part.label is None:
                continue
            if symbvar is None:
                symbvar = pre("sym" + part.label)
                lines.append(f"{symbvar} = {self.stack_elem(k - i)}")
            if lr_values:
                lines.append(f"{part.label}left = {symbvar}.left")
                lines.append(f"{part.label}right = {symbvar}.right")
            if part.stack_type is not None:
                lines.append(f"{part.label}: {part.stack_type} = {symbvar}.value")

        if has_code(prod.action):
            lines.extend(reindent(prod.action, "").split("\n"))

        leftright = ""
        if lr_values:
            leftsym = pre("left")
            rightsym = pre("right")
            if k == 0:
                lines.append(f"{rightsym} = {self.stack_elem(1)}")
                bound.add(rightsym)
            else:
                # 派生产生式在遍历时没有绑定最左/最右符号
                if rightsym not in bound:
                    lines.append(f"{rightsym} = {self.stack_elem(1)}")
                if k >= 2 and leftsym not in bound:
                    lines.append(f"{leftsym} = {self.stack_elem(k)}")
            if k < 2:
                leftsym = rightsym
            leftright = f", {leftsym}, {rightsym}"

        result = ""
        if lhs_type is not None:
            result = ", RESULT" if lr_values else ", value=RESULT"
        lines.append(
            f"{pre('result')} = {pre('parser')}.get_symbol_factory().new_symbol("
            f"{prod.lhs.name!r}, {prod.lhs.index}{leftright}{result})"
        )
        if prod is start_prod:
            lines.append("# ACCEPT")
            lines.append(f"{pre('parser')}.done_parsing()")
        lines.append(f"return {pre('result')}")
        return lines

    def emit(self, out, grammar):
        """输出封装全部用户动作代码的类"""
        ind = INDENT
        stack_type = "List[Symbol]" if self.config.generic_stack else "list"

        print(file=out)
        print(file=out)
        print(f"class {self.class_name}:", file=out)
        print(f'{ind}"""Generated class to encapsulate user supplied action code."""', file=out)
        if has_code(self.config.action_code):
            print(file=out)
            print(reindent(self.config.action_code, ind), file=out)
        print(file=out)
        print(f"{ind}def __init__(self, parser):", file=out)
        print(f"{ind * 2}self.parser = parser", file=out)
        print(f"{ind * 2}self.{pre('dispatch')} = {{", file=out)
        for prod in grammar.productions:
            print(f"{ind * 3}{prod.index}: self.{self.method_name(prod)},", file=out)
        print(f"{ind * 2}}}", file=out)
        print(file=out)
        print(f"{ind}def {pre('do_action')}(self, {pre('act_num')}, {pre('parser')}, "
              f"{pre('stack')}: {stack_type}) -> Symbol:", file=out)
        print(f'{ind * 2}"""Method with the actual generated action code."""', file=out)
        # 只接受真正的 int：True 或 1.0 与 1 的哈希相同，会命中字典中的 1 号产生式
        print(f"{ind * 2}action = None", file=out)
        print(f"{ind * 2}if type({pre('act_num')}) is int:", file=out)
        print(f"{ind * 3}action = self.{pre('dispatch')}.get({pre('act_num')})", file=out)
        print(f"{ind * 2}if action is None:", file=out)
        print(f"{ind * 3}raise ParseTableError(", file=out)
        print(f'{ind * 4}"Invalid action number found in internal parse table", {pre("act_num")})', file=out)
        print(f"{ind * 2}# Stack size for peeking into the stack", file=out)
        print(f"{ind * 2}return action({pre('parser')}, {pre('stack')}, len({pre('stack')}))", file=out)

        start_prod = grammar.start_production
        for prod in grammar.productions:
            print(file=out)
            print(f"{ind}# {prod}", file=out)
            print(f"{ind}def {self.method_name(prod)}(self, {pre('parser')}, "
                  f"{pre('stack')}, {pre('size')}):", file=out)
            for line in self.production_body(prod, start_prod):
                print(f"{ind * 2}{line}" if line else "", file=out)
