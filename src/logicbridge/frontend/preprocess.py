"""Natural-language preprocessing: structured English to canonical keyword syntax.

Each non-blank, non-comment line is trimmed, its quoted literals are swapped
for placeholders, and the rest is lowercased. Rule groups then run in a fixed
order (data structures, control flow, I/O, comparison words, math words).
Known keywords are uppercased at word boundaries and the literals restored.
Lines no rule matches pass through lowercased; the preprocessor never fails.
"""

from __future__ import annotations

import re
from typing import Callable

from .tokens import KEYWORDS

Rule = tuple[re.Pattern[str], str | Callable[[re.Match[str]], str]]

_PLACEHOLDER = re.compile(r"__str(\d+)__", re.IGNORECASE)


def _rules(pairs: list[tuple[str, str | Callable[[re.Match[str]], str]]]) -> list[Rule]:
    return [(re.compile(pattern, re.IGNORECASE), repl) for pattern, repl in pairs]


def _struct(m: re.Match[str]) -> str:
    fields = [f for f in re.split(r"[,\s]+", m.group(2)) if f]
    return "STRUCT " + " ".join([m.group(1)] + fields)


# ============================================================
# DATA STRUCTURES
# ============================================================

# Natural phrasing puts the value first; canonical syntax puts the container first.
DATA_STRUCTURE_RULES: list[Rule] = _rules(
    [
        (r"^(?:create|make) struct (\w+) with fields (.+)$", _struct),
        (r"^(?:create|make) priority queue (\w+)$", r"PRIORITY_QUEUE \1"),
        (r"^(?:create|make) deque (\w+)$", r"DEQUE \1"),
        (r"^push front (\w+) (.+)$", r"DEQUE_PUSH_FRONT \1 \2"),
        (r"^push back (\w+) (.+)$", r"DEQUE_PUSH_BACK \1 \2"),
        (r"^pop front from (\w+)$", r"DEQUE_POP_FRONT \1"),
        (r"^pop back from (\w+)$", r"DEQUE_POP_BACK \1"),
        (r"^(?:create|make) pair (\w+) with (.+) and (.+)$", r"PAIR \1 \2 \3"),
        (r"^first of (\w+)$", r"PAIR_FIRST \1"),
        (r"^second of (\w+)$", r"PAIR_SECOND \1"),
        (r"^(?:create|make) graph (\w+) with (\w+) nodes$", r"GRAPH \1 \2"),
        (r"^add edge from (\w+) to (\w+) in (\w+)$", r"GRAPH_ADD_EDGE \3 \1 \2"),
        (r"^add edge (\w+) (\w+) in (\w+)$", r"GRAPH_ADD_EDGE \3 \1 \2"),
        (r"^(?:create|make) tree (\w+)$", r"TREE \1"),
        (r"^insert (.+) into tree (\w+)$", r"TREE_INSERT \2 \1"),
        (r"^add (.+) to tree (\w+)$", r"TREE_INSERT \2 \1"),
        (r"^(?:create|make) linked list (\w+)$", r"LINKED_LIST \1"),
        (r"^add (.+) to front of (\w+)$", r"LL_PUSH_FRONT \2 \1"),
        (r"^add (.+) to back of (\w+)$", r"LL_PUSH_BACK \2 \1"),
        (r"^remove front from (\w+)$", r"LL_POP_FRONT \1"),
        (r"^remove back from (\w+)$", r"LL_POP_BACK \1"),
        (r"^(?:create|make) vector (\w+)$", r"VECTOR \1"),
        (r"^append (.+) to (\w+)$", r"VECTOR_PUSH \2 \1"),
        (r"^push (.+) to vector (\w+)$", r"VECTOR_PUSH \2 \1"),
        (r"^remove last from (\w+)$", r"VECTOR_POP \1"),
        (r"^(?:create|make) set (\w+)$", r"SET_DS \1"),
        (r"^add (.+) to set (\w+)$", r"SET_ADD \2 \1"),
        (r"^remove (.+) from set (\w+)$", r"SET_REMOVE \2 \1"),
        # A leading statement keyword is not the container
        (r"^(?!(?:print|show|display|output|if|while|set|let)\b)(\w+) contains (.+)$", r"CONTAINS \1 \2"),
        (r"^(?:create|make) (?:map|dictionary) (\w+)$", r"MAP \1"),
        (r"^put (\w+) (\w+) in (\w+)$", r"MAP_INSERT \3 \1 \2"),
        (r"^insert (\w+) (\w+) into (\w+)$", r"MAP_INSERT \3 \1 \2"),
        (r"^map insert (\w+) (\w+) (\w+)$", r"MAP_INSERT \1 \2 \3"),
        (r"^map get (\w+) (\w+)$", r"MAP_GET \1 \2"),
        (r"^get from (\w+) using (\w+)$", r"MAP_GET \1 \2"),
        (r"^map remove (\w+) (\w+)$", r"MAP_REMOVE \1 \2"),
        (r"^(?:create|make) queue (\w+)$", r"QUEUE \1"),
        (r"^enqueue (.+) into (\w+)$", r"ENQUEUE \2 \1"),
        (r"^add (.+) to queue (\w+)$", r"ENQUEUE \2 \1"),
        (r"^dequeue from (\w+)$", r"DEQUEUE \1"),
        (r"^remove from queue (\w+)$", r"DEQUEUE \1"),
        (r"^front of (\w+)$", r"FRONT \1"),
        (r"^(?:create|make) stack (\w+)$", r"STACK \1"),
        (r"^push (.+) onto (\w+)$", r"PUSH \2 \1"),
        (r"^push (.+) to (\w+)$", r"PUSH \2 \1"),
        (r"^add (.+) to stack (\w+)$", r"PUSH \2 \1"),
        (r"^pop from (\w+)$", r"POP \1"),
        (r"^remove from stack (\w+)$", r"POP \1"),
        (r"^top of (\w+)$", r"TOP \1"),
        (r"^peek (\w+)$", r"TOP \1"),
        (r"^size of (\w+)$", r"SIZE \1"),
        (r"^(\w+) is empty$", r"EMPTY \1"),
        (r"^(?:create|make) array (\w+) of size (.+)$", r"ARRAY \1 \2"),
        (r"^create list (\w+) with (.+) items$", r"ARRAY \1 \2"),
    ]
)

# ============================================================
# CONTROL FLOW
# ============================================================

CONTROL_FLOW_RULES: list[Rule] = _rules(
    [
        (r"^(?:begin|start)$", "START"),
        (r"^(?:finish|end)$", "END"),
        (r"^(?:end\s+if|endif)$", "END IF"),
        (r"^(?:end\s+while|endwhile)$", "END WHILE"),
        (r"^(?:end\s+for|endfor|end\s+repeat)$", "END FOR"),
        (r"^if\s+(.+)\s+then$", r"IF \1 THEN"),
        (r"^(?:otherwise|else)$", "ELSE"),
        (r"^for\s+(\w+)\s+from\s+(.+)\s+to\s+(.+)$", r"FOR \1 = \2 TO \3"),
        (r"^for each\s+(\w+)\s+from\s+(.+)\s+to\s+(.+)$", r"FOR \1 = \2 TO \3"),
        (r"^repeat\s+(.+)\s+times\s+with\s+(\w+)$", r"FOR \2 = 0 TO \1 - 1"),
        (r"^repeat\s+(.+)\s+times$", r"FOR i = 0 TO \1 - 1"),
        (r"^keep doing while\s+(.+)$", r"WHILE \1 DO"),
        (r"^while\s+(.+)\s+do$", r"WHILE \1 DO"),
        (r"^for\s+(\w+)\s*=\s*(.+)\s+to\s+(.+)$", r"FOR \1 = \2 TO \3"),
    ]
)

# ============================================================
# INPUT / OUTPUT / ASSIGNMENT
# ============================================================

IO_RULES: list[Rule] = _rules(
    [
        (r"^ask for\s+(.+)$", r"INPUT \1"),
        (r"^(?:get|read)\s+(\w+)$", r"INPUT \1"),
        (r"^input\s+(.+)$", r"INPUT \1"),
        (r"^(?:show|display|output|print)\s+(.+)$", r"PRINT \1"),
        (r"^set\s+(\w+)\s+to\s+(.+)$", r"SET \1 = \2"),
        (r"^make\s+(\w+)\s+equal\s+to\s+(.+)$", r"SET \1 = \2"),
        (r"^let\s+(\w+)\s*=\s*(.+)$", r"SET \1 = \2"),
        (r"^set\s+(.+)$", r"SET \1"),
    ]
)

# ============================================================
# OPERATOR WORDS
# ============================================================

# Longer phrases first so "is greater than or equal to" is not split.
COMPARISON_RULES: list[Rule] = _rules(
    [
        (r"\bis greater than or equal to\b", ">="),
        (r"\bis less than or equal to\b", "<="),
        (r"\bis greater than\b", ">"),
        (r"\bis less than\b", "<"),
        (r"\bis at least\b", ">="),
        (r"\bis at most\b", "<="),
        (r"\bis not equal to\b", "!="),
        (r"\bis equal to\b", "=="),
        (r"\bnot equals\b", "!="),
        (r"\bequals\b", "=="),
    ]
)

MATH_RULES: list[Rule] = _rules(
    [
        (r"\bplus\b", "+"),
        (r"\bminus\b", "-"),
        (r"\btimes\b", "*"),
        (r"\bdivided by\b", "/"),
        (r"\b(?:modulo|mod)\b", "%"),
    ]
)

RULE_GROUPS: list[list[Rule]] = [
    DATA_STRUCTURE_RULES,
    CONTROL_FLOW_RULES,
    IO_RULES,
    COMPARISON_RULES,
    MATH_RULES,
]


class Preprocessor:
    """Rewrites structured English into canonical uppercase keyword syntax."""

    def __init__(self, keywords: tuple[str, ...] | list[str] = KEYWORDS):
        ordered = sorted(keywords, key=len, reverse=True)
        self.keyword_patterns: list[tuple[re.Pattern[str], str]] = [
            (
                re.compile(r"\b" + r"\s+".join(re.escape(w) for w in kw.split()) + r"\b", re.IGNORECASE),
                kw,
            )
            for kw in ordered
        ]

    def process(self, source: str) -> str:
        return "\n".join(self.process_line(line) for line in source.split("\n"))

    def process_line(self, line: str) -> str:
        trimmed = line.strip()
        if trimmed == "" or trimmed.startswith("//"):
            return line
        cleaned, literals = _extract_strings(trimmed)
        text = cleaned.lower()
        for group in RULE_GROUPS:
            for pattern, repl in group:
                text = pattern.sub(repl, text)
        for pattern, kw in self.keyword_patterns:
            text = pattern.sub(kw, text)
        return _restore_strings(text, literals)


def _extract_strings(line: str) -> tuple[str, list[tuple[str, str, bool]]]:
    """Replace quoted literals with placeholders.

    Returns the cleaned line and (quote, text, closed) per literal.
    """
    literals: list[tuple[str, str, bool]] = []
    out: list[str] = []
    i = 0
    while i < len(line):
        c = line[i]
        if c == '"' or c == "'":
            j = line.find(c, i + 1)
            closed = j >= 0
            end = j if closed else len(line)
            out.append("__STR" + str(len(literals)) + "__")
            literals.append((c, line[i + 1 : end], closed))
            i = end + 1
            continue
        out.append(c)
        i += 1
    return "".join(out), literals


def _restore_strings(line: str, literals: list[tuple[str, str, bool]]) -> str:
    def restore(m: re.Match[str]) -> str:
        index = int(m.group(1))
        if index >= len(literals):
            return m.group(0)
        quote, text, closed = literals[index]
        if closed:
            return quote + text + quote
        return quote + text

    return _PLACEHOLDER.sub(restore, line)


def preprocess(source: str, keywords: tuple[str, ...] | list[str] = KEYWORDS) -> str:
    """Normalize structured-English source into canonical keyword syntax."""
    return Preprocessor(keywords).process(source)
