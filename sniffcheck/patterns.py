"""Regular expressions and heuristics shared by the analysers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cache


@dataclass(frozen=True)
class CommonPatterns:
    any_type: re.Pattern[str]
    function_def: re.Pattern[str]
    ts_ignore: re.Pattern[str]
    ts_expect_error: re.Pattern[str]
    import_statement: re.Pattern[str]
    named_import: re.Pattern[str]
    default_import: re.Pattern[str]
    event_listener: re.Pattern[str]
    timer_function: re.Pattern[str]
    array_push: re.Pattern[str]
    infinite_loop: re.Pattern[str]
    closure_pattern: re.Pattern[str]


@cache
def common_patterns() -> CommonPatterns:
    """Return the shared, compiled pattern set."""
    return CommonPatterns(
        any_type=re.compile(r"\b:\s*any\b"),
        function_def=re.compile(
            r"(?:function\s+\w+|const\s+\w+\s*=\s*(?:async\s+)?\([^)]*\)\s*=>"
            r"|(?:async\s+)?function\s*\([^)]*\))\s*\{"
        ),
        ts_ignore=re.compile(r"@ts-ignore"),
        ts_expect_error=re.compile(r"@ts-expect-error"),
        import_statement=re.compile(
            r"""^import\s+(.+?)\s+from\s+['"](.+?)['"];?\s*(?://.*)?$"""
        ),
        named_import=re.compile(r"import\s*\{\s*([^}]+)\s*\}"),
        default_import=re.compile(r"import\s+(\w+)\s+from"),
        event_listener=re.compile(r"addEventListener\([^)]+\)"),
        timer_function=re.compile(r"set(?:Interval|Timeout)\([^)]+\)"),
        array_push=re.compile(r"\w+\.push\([^)]+\)"),
        infinite_loop=re.compile(r"while\s*\(\s*true\s*\)"),
        closure_pattern=re.compile(
            r"function[^{]*\{[\s\S]*function[^{]*\{[\s\S]*\}[\s\S]*\}"
        ),
    )


_KEYWORDS = frozenset(
    {
        # JavaScript/TypeScript keywords
        "const", "let", "var", "function", "class", "interface", "type", "enum",
        "if", "else", "for", "while", "do", "switch", "case", "default",
        "return", "break", "continue", "throw", "try", "catch", "finally",
        "import", "export", "from", "as", "async", "await", "yield",
        "true", "false", "null", "undefined", "this", "super",
        # Common globals
        "console", "window", "document", "process", "require", "module",
        # React and common hooks
        "React", "Component", "useState", "useEffect", "useContext",
        # TypeScript types
        "string", "number", "boolean", "object", "any", "void", "never",
    }
)


def is_keyword_or_builtin(identifier: str) -> bool:
    """True for language keywords, common globals and very short names."""
    return identifier in _KEYWORDS or len(identifier.encode("utf-8")) <= 2


def is_in_string_literal_or_comment(line: str) -> bool:
    """Rough check whether a line is a comment, a bare string or a console call."""
    trimmed = line.strip()
    if trimmed.startswith(("//", "/*", "*")):
        return True
    return (
        any(trimmed.startswith(q) and trimmed.endswith(q) for q in ('"', "'", "`"))
        or "console.log" in trimmed
        or "console.error" in trimmed
        or "console.warn" in trimmed
    )