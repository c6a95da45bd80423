from __future__ import annotations

from typing import Optional

from luaparser import ast, astnodes

GETINFO_HEADER = "function widget:GetInfo()"
BLOCK_END = "end"

# Lua table key -> record info key
INFO_KEYS = {
    "name": "name",
    "desc": "description",
    "author": "author",
    "date": "date",
    "version": "version",
}


def extract_getinfo_block(lua_code: str) -> Optional[str]:
    lines = [line.rstrip("\r") for line in lua_code.split("\n")]
    try:
        start = next(i for i, line in enumerate(lines) if line.strip() == GETINFO_HEADER)
    except StopIteration:
        return None
    for offset, line in enumerate(lines[start + 1:], start=start + 1):
        if line.strip() == BLOCK_END:
            return "\n".join(lines[start:offset + 1])
    return None


def _text(node) -> Optional[str]:
    if isinstance(node, astnodes.String):
        value = node.s
        return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value
    if isinstance(node, astnodes.Number):
        return str(node.n)
    return None


def _key(node) -> Optional[str]:
    if isinstance(node, astnodes.Name):
        return node.id
    if isinstance(node, astnodes.String):
        return _text(node)
    return None


def _returned_table(tree) -> Optional[astnodes.Table]:
    for node in ast.walk(tree):
        if not isinstance(node, astnodes.Return):
            continue
        values = node.values if isinstance(node.values, list) else [node.values]
        for value in values:
            if isinstance(value, astnodes.Table):
                return value
    return None


def extract_widget_info(lua_code: str) -> Optional[dict[str, str]]:
    """
    Read the literal fields of a widget's GetInfo() table without running it.

    Returns None when the script has no GetInfo() block or the block does not
    parse. Strings are kept verbatim and numbers as their text; fields with
    any other value are left out.
    """
    block = extract_getinfo_block(lua_code)
    if block is None:
        return None
    try:
        tree = ast.parse(block)
    except Exception:
        return None

    table = _returned_table(tree)
    if table is None:
        return {}

    info: dict[str, str] = {}
    for field in table.fields:
        target = INFO_KEYS.get(_key(field.key))
        if target is None or target in info:
            continue
        value = _text(field.value)
        if value is not None:
            info[target] = value
    return info
