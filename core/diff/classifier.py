"""
Stateless predicates over single diff lines and file paths.

The lookup tables are immutable so they can be inspected and tested on their own.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

DIFF_HEADER = "diff --git"

EXTENSION_TYPES: Mapping[str, str] = MappingProxyType({
    "go": "go",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "rb": "ruby",
    "rs": "rust",
    "c": "c",
    "cpp": "cpp",
    "h": "c",
    "hpp": "cpp",
    "cs": "csharp",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "yaml": "yaml",
    "yml": "yaml",
    "json": "json",
    "toml": "toml",
    "md": "markdown",
    "sql": "sql",
})

# Matched against "/" + lowercased path so top-level directories count too.
TEST_PATH_MARKERS: Tuple[str, ...] = (
    "_test.",
    ".test.",
    ".spec.",
    "/test/",
    "/tests/",
    "/test_",
    "__tests__",
)

CONFIG_PATH_MARKERS: Tuple[str, ...] = (
    "package.json", "go.mod", "go.sum", "cargo.toml",
    "requirements.txt", "gemfile", "pom.xml", "build.gradle",
    ".yml", ".yaml", ".toml", ".json", ".config", ".env",
    "dockerfile", "makefile", ".gitignore", ".dockerignore",
)


def is_addition(line: str) -> bool:
    return line.startswith("+") and not line.startswith("+++")


def is_deletion(line: str) -> bool:
    return line.startswith("-") and not line.startswith("---")


def added_content(line: str) -> str:
    """Content of an addition line without the '+' prefix and surrounding whitespace."""
    return line[1:].strip()


def file_type(path: str) -> str:
    """Maps the lowercased extension of `path` to a file-type tag."""
    name = path.rsplit("/", 1)[-1]
    _, dot, ext = name.rpartition(".")
    if not dot:
        return "unknown"
    return EXTENSION_TYPES.get(ext.lower(), "unknown")


def is_test_file(path: str) -> bool:
    lower_path = "/" + path.lower()
    return any(marker in lower_path for marker in TEST_PATH_MARKERS)


def is_config_file(path: str) -> bool:
    lower_path = path.lower()
    return any(marker in lower_path for marker in CONFIG_PATH_MARKERS)
