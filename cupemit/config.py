from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class GenerationConfig:
    """
    一次代码生成所需的全部（不可变）配置。
    :param symbol_const_class_name: 符号常量类的名称。
    :param parser_class_name: 生成的解析器类的名称。
    :param emit_non_terms: 是否同时为非终结符生成常量。
    :param suppress_scanner: 是否省略接受扫描器的构造方式。
    :param compact_reduces: 是否把出现最多的归约作为默认动作来压缩动作表。
    :param lr_values: 是否跟踪左右位置（extent）。
    :param generic_stack: 目标是否支持参数化容器类型（为 False 时每次读栈都做 cast）。
    :param start_state: 解析自动机的起始状态。
    :param cache_id: 打包表缓存的 ID，None 表示不缓存。
    """
    symbol_const_class_name: str = "sym"
    parser_class_name: str = "parser"
    emit_non_terms: bool = False
    suppress_scanner: bool = False
    compact_reduces: bool = False
    lr_values: bool = True
    generic_stack: bool = True
    start_state: int = 0
    action_code: Optional[str] = None
    parser_code: Optional[str] = None
    init_code: Optional[str] = None
    scan_code: Optional[str] = None
    import_list: Tuple[str, ...] = ()
    nowarn: bool = False
    cache_id: Optional[str] = None


@dataclass
class GenerationReport:
    """生成过程的统计信息（仅供观察，时间单位为秒）"""
    symbols_time: float = 0.0
    parser_time: float = 0.0
    action_code_time: float = 0.0
    production_table_time: float = 0.0
    action_table_time: float = 0.0
    goto_table_time: float = 0.0

    terminals: int = 0
    non_terminals: int = 0
    productions: int = 0
    not_reduced: int = 0
    unused_term: int = 0
    unused_non_term: int = 0
    table_sizes: dict = field(default_factory=dict)
    cache_hit: bool = False
