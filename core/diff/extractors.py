"""
Key-change and import extraction from added diff lines.

Each file type maps to one extraction function in ``extractor_registry``;
file types without an entry fall back to the generic extractor. The functions
look at a single added line (prefix and surrounding whitespace removed) and
return zero or more human-readable descriptions such as ``"function main"``.
"""
import re
from typing import Callable, List

from core.diff import classifier
from core.registry import extractor_registry
from utils.text import truncate_string, unique_strings

MAX_KEY_CHANGES = 5
GENERIC_MAX_LINE = 100
GENERIC_SNIPPET = 50
IMPORT_SNIPPET = 60

LineExtractor = Callable[[str], List[str]]

_GO_FUNC = re.compile(r"^func\s+(?:\(\s*\w+\s+\*?\w+(?:\[[^\]]*\])?\s*\)\s*)?(\w+)\s*[\[(]")
_GO_TYPE = re.compile(r"^type\s+(\w+)\s+(?:struct|interface)\b")

_JS_FUNCS = (
    re.compile(r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(\w+)"),
    re.compile(r"^(?:export\s+)?(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:function\b|\()"),
    re.compile(r"^(?:async\s+)?(\w+)\s*\([^)]*\)\s*\{"),
)
_JS_CLASS = re.compile(r"^(?:export\s+)?(?:default\s+)?class\s+(\w+)")
# Control-flow statements look like method shorthand to the last pattern above.
_JS_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "with", "return", "function"})

_PY_FUNC = re.compile(r"^(?:async\s+)?def\s+(\w+)")
_PY_CLASS = re.compile(r"^class\s+(\w+)")

_GENERIC_CALL = re.compile(r"\w+\s*\([^)]*\)\s*\{?")

IMPORT_PATTERNS = (
    re.compile(r"^import\b"),
    re.compile(r"^from\s+\S+\s+import\b"),
    re.compile(r"^require\("),
    re.compile(r"^(?:const|let|var)\s+[\w{}\s,]+=\s*require\("),
    re.compile(r"^use\s+"),
)


@extractor_registry.register("go")
def extract_go_changes(line: str) -> List[str]:
    changes = []
    match = _GO_FUNC.match(line)
    if match:
        changes.append(f"function {match.group(1)}")
    match = _GO_TYPE.match(line)
    if match:
        changes.append(f"type {match.group(1)}")
    return changes


@extractor_registry.register("javascript")
@extractor_registry.register("typescript")
def extract_js_changes(line: str) -> List[str]:
    changes = []
    for pattern in _JS_FUNCS:
        match = pattern.match(line)
        if match and match.group(1) not in _JS_KEYWORDS:
            changes.append(f"function {match.group(1)}")
            break
    match = _JS_CLASS.match(line)
    if match:
        changes.append(f"class {match.group(1)}")
    return changes


@extractor_registry.register("python")
def extract_python_changes(line: str) -> List[str]:
    changes = []
    match = _PY_FUNC.match(line)
    if match:
        changes.append(f"function {match.group(1)}")
    match = _PY_CLASS.match(line)
    if match:
        changes.append(f"class {match.group(1)}")
    return changes


def extract_generic_changes(line: str) -> List[str]:
    """Call-like lines of any language, skipping long (often minified) lines."""
    if len(line) < GENERIC_MAX_LINE and _GENERIC_CALL.search(line):
        return [f"function: {truncate_string(line, GENERIC_SNIPPET)}"]
    return []


def extractor_for(file_type: str) -> LineExtractor:
    if file_type in extractor_registry:
        return extractor_registry.get(file_type)
    return extract_generic_changes


def _added_lines(file_diff: str) -> List[str]:
    return [
        classifier.added_content(line)
        for line in file_diff.split("\n")
        if classifier.is_addition(line)
    ]


def extract_key_changes(file_diff: str, file_type: str) -> List[str]:
    """Returns at most five unique construct descriptions from the added lines of a file."""
    extract = extractor_for(file_type)
    changes = []
    for line in _added_lines(file_diff):
        changes.extend(extract(line))
    return unique_strings(changes)[:MAX_KEY_CHANGES]


def extract_import_changes(file_diff: str) -> List[str]:
    """Returns the unique added import/dependency lines of a file, truncated to 60 characters."""
    changes = []
    for line in _added_lines(file_diff):
        if any(pattern.match(line) for pattern in IMPORT_PATTERNS):
            changes.append(truncate_string(line, IMPORT_SNIPPET))
    return unique_strings(changes)
