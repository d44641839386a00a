from pytest import raises

from cupemit import GenerationConfig, ParseTableError, emit_parser_to_string
from cupemit.actions import ActionCodeGenerator

from .utils import expr_grammar, expr_tables, load_generated, sym


def body(prod_index, **kwargs):
    g = expr_grammar()
    gen = ActionCodeGenerator(GenerationConfig(**kwargs))
    return gen.production_body(g.productions[prod_index], g.start_production)


def generated_parser(**kwargs):
    g = expr_grammar()
    action, reduce = expr_tables(g)
    source, _ = emit_parser_to_string(g, action, reduce, GenerationConfig(**kwargs))
    return load_generated(source)["parser"]()


class TestProductionBody(object):
    def test_labels_and_offsets(self):
        lines = body(2)
        assert lines[0] == "RESULT: int = None"
        assert "CUP_right = CUP_stack[-1]" in lines
        assert "CUP_left = CUP_stack[CUP_size - 3]" in lines
        assert "bleft = CUP_right.left" in lines
        assert "b: int = CUP_right.value" in lines
        assert "a: int = CUP_left.value" in lines
        assert "RESULT = a + b" in lines
        assert lines[-2] == "CUP_result = CUP_parser.get_symbol_factory().new_symbol('expr', 2, CUP_left, CUP_right, RESULT)"
        assert lines[-1] == "return CUP_result"

    def test_epsilon_extents(self):
        lines = body(4)
        assert "CUP_right = CUP_stack[-1]" in lines
        assert sum("CUP_stack" in line for line in lines) == 1
        assert lines[-2].endswith("new_symbol('opt_semi', 3, CUP_right, CUP_right)")

    def test_single_symbol_collapse(self):
        lines = body(3)
        assert sum("CUP_stack" in line for line in lines) == 1
        assert "CUP_left" not in "\n".join(lines)
        assert lines[-2].endswith("new_symbol('expr', 2, CUP_right, CUP_right, RESULT)")

    def test_unlabeled_single_symbol(self):
        lines = body(5)
        assert lines == [
            "CUP_right = CUP_stack[-1]",
            "CUP_result = CUP_parser.get_symbol_factory().new_symbol('opt_semi', 3, CUP_right, CUP_right)",
            "return CUP_result",
        ]

    def test_derived_uses_base_labels(self):
        lines = body(6)
        assert lines[0] == "RESULT: int = None"
        assert "CUP_syma = CUP_stack[CUP_size - 2]" in lines
        assert "a: int = CUP_syma.value" in lines
        assert "RESULT = a * 10" in lines
        # 最左/最右符号在动作代码之后才绑定
        assert lines.index("CUP_right = CUP_stack[-1]") > lines.index("RESULT = a * 10")
        assert "CUP_left = CUP_stack[CUP_size - 2]" in lines

    def test_intermediate_result(self):
        lines = body(7)
        assert lines[0] == "RESULT: int = CUP_stack[-1].value"
        assert "CUP_symb = CUP_stack[-1]" in lines
        assert "CUP_syma = CUP_stack[CUP_size - 3]" in lines

    def test_accept_only_for_start(self):
        g = expr_grammar()
        gen = ActionCodeGenerator(GenerationConfig())
        for prod in g.productions:
            lines = gen.production_body(prod, g.start_production)
            if prod is g.start_production:
                assert lines[-2] == "CUP_parser.done_parsing()"
            else:
                assert "CUP_parser.done_parsing()" not in lines

    def test_without_lr_values(self):
        lines = body(2, lr_values=False)
        text = "\n".join(lines)
        assert "left" not in text
        assert "right" not in text
        assert "CUP_syma = CUP_stack[CUP_size - 3]" in lines
        assert "CUP_symb = CUP_stack[-1]" in lines
        assert lines[-2].endswith("new_symbol('expr', 2, value=RESULT)")

    def test_without_lr_values_epsilon(self):
        lines = body(4, lr_values=False)
        assert "CUP_stack" not in "\n".join(lines)
        assert lines[-2].endswith("new_symbol('opt_semi', 3)")

    def test_cast_without_generic_stack(self):
        lines = body(3, generic_stack=False)
        assert lines[1] == "CUP_right = cast(Symbol, CUP_stack[-1])"

    def test_multiline_action_reindented(self):
        g = expr_grammar()
        prod = g.add_production("expr", [("NUMBER", "n")], """
            if n > 3:
                RESULT = n
            else:
                RESULT = 0
        """)
        lines = ActionCodeGenerator(GenerationConfig()).production_body(prod, g.start_production)
        assert "if n > 3:" in lines
        assert "    RESULT = n" in lines


class TestGeneratedDispatch(object):
    def test_reduce_binary(self):
        p = generated_parser()
        stack = [sym(), sym(1, 0, 1), sym("+", 2, 3), sym(2, 4, 5)]
        result = p.do_action(2, stack)
        assert result.value == 3
        assert (result.left, result.right) == (0, 5)
        assert result.sym == 2
        assert result.name == "expr"
        assert not p.is_done
        assert len(stack) == 4

    def test_reduce_single(self):
        p = generated_parser()
        result = p.do_action(3, [sym(), sym(7, 5, 6)])
        assert result.value == 7
        assert (result.left, result.right) == (5, 6)

    def test_reduce_epsilon(self):
        p = generated_parser()
        result = p.do_action(4, [sym(), sym(7, 5, 6)])
        assert result.value is None
        assert (result.left, result.right) == (5, 6)
        assert result.sym == 3

    def test_derived(self):
        p = generated_parser()
        result = p.do_action(6, [sym(4, 0, 1), sym("+", 2, 3)])
        assert result.value == 40
        assert (result.left, result.right) == (0, 3)

    def test_intermediate_result(self):
        p = generated_parser()
        result = p.do_action(7, [sym(5, 0, 1), sym("+", 2, 3), sym(10, 4, 5)])
        assert result.value == 15

    def test_accept(self):
        p = generated_parser()
        result = p.do_action(0, [sym(), sym([1], 0, 1), sym(None, 2, 2)])
        assert result.value == [1]
        assert p.is_done

    def test_invalid_action_number(self):
        p = generated_parser()
        for act_num in (8, -1, 1000, None, True, 1.0, "1"):
            with raises(ParseTableError) as exc_info:
                p.do_action(act_num, [sym()])
            assert exc_info.value.get_act_num() == act_num

    def test_without_generic_stack(self):
        p = generated_parser(generic_stack=False, lr_values=False)
        result = p.do_action(2, [sym(1), sym("+"), sym(2)])
        assert result.value == 3
        assert (result.left, result.right) == (-1, -1)

    def test_action_code_block(self):
        p = generated_parser(action_code="""
            def double(self, x):
                return 2 * x
        """)
        assert p.action_obj.double(4) == 8
