# =============================================================================
# Code Utils
# =============================================================================
import re
import time
import keyword
import textwrap

_ILLEGAL_IDENT = re.compile(r"\W")


def sanitize_identifier(name):
    """把符号名转换为合法的 Python 标识符（如 NT$0 -> NT_0）"""
    ident = _ILLEGAL_IDENT.sub("_", name)
    if not ident or ident[0].isdigit():
        ident = "_" + ident
    if keyword.iskeyword(ident):
        ident += "_"
    return ident


def reindent(code, prefix):
    """去掉用户代码片段的公共缩进，再整体缩进到 prefix"""
    return textwrap.indent(textwrap.dedent(code).strip("\n"), prefix)


def has_code(code):
    return code is not None and bool(code.strip())


class Stopwatch:
    """记录一段生成过程所花的时间"""
    def __init__(self):
        self.elapsed = 0.0
        self._start = None

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info):
        self.elapsed = time.perf_counter() - self._start
        return False

# =============================================================================
# Cache Utils
# =============================================================================
import os
import json
import errno
import hashlib
import tempfile


def compute_tables_hash(prod_table, action_table, reduce_table, compact_reduces) -> str:
    hasher = hashlib.sha1()
    hasher.update(json.dumps(prod_table).encode())
    hasher.update(json.dumps(action_table).encode())
    hasher.update(json.dumps(reduce_table).encode())
    hasher.update(bytes([compact_reduces]))
    return hasher.hexdigest()


def data_is_valid(data, prod_table, action_table, reduce_table) -> bool:
    for key, table in (("production_table", prod_table),
                       ("action_table", action_table),
                       ("reduce_table", reduce_table)):
        if key not in data:
            return False
        # 长度与偏移单元需要与当前输入一致
        units = data[key]
        if len(units) != len(table) + 3:
            return False
        if units[1] != (len(table) & 0xffff):
            return False
    return True


def read_cache(cache_file):
    if not os.path.exists(cache_file):
        return None
    with open(cache_file) as f:
        return json.load(f)


def write_cache(cache_dir, cache_file, data):
    if not os.path.exists(cache_dir):
        try:
            os.makedirs(cache_dir, mode=0o0700)
        except OSError as e:
            if e.errno == errno.EROFS:
                return
            raise

    with tempfile.NamedTemporaryFile(dir=cache_dir, delete=False, mode="w") as f:
        json.dump(data, f)
    os.replace(f.name, cache_file)
