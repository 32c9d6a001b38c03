"""Path rules — which repository paths to ignore and how to recognise test files."""

from __future__ import annotations

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        "dist",
        "build",
        "out",
        "venv",
        ".venv",
        "env",
        "__pycache__",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "vendor",
        ".idea",
        ".next",
        ".nuxt",
        "coverage",
        "htmlcov",
        ".eggs",
        "target",           # Rust / Java
        "Pods",             # iOS
        ".gradle",
        ".terraform",
    }
)

SECRET_FILES: frozenset[str] = frozenset(
    {
        ".env",
        ".env.local",
        ".env.production",
        ".env.development",
        ".env.staging",
        ".env.test",
    }
)

CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".py", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs",
        ".go", ".rs", ".rb", ".java", ".kt", ".cs", ".php",
        ".swift", ".c", ".cc", ".cpp", ".ex", ".exs", ".sh", ".bats",
    }
)

TEST_DIR_NAMES: frozenset[str] = frozenset({"tests", "test", "spec", "__tests__"})

TEST_NAME_MARKERS: tuple[str, ...] = ("_test.", ".test.", ".spec.", "_spec.")


def filename(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def depth(path: str) -> int:
    return path.count("/")


def in_skipped_dir(path: str) -> bool:
    """Return *True* if any directory segment of *path* belongs to ``SKIP_DIRS``."""
    parts = path.split("/")[:-1]
    return any(part in SKIP_DIRS or part.endswith(".egg-info") for part in parts)


def is_code_file(path: str) -> bool:
    name = filename(path).lower()
    dot = name.rfind(".")
    return dot != -1 and name[dot:] in CODE_EXTENSIONS


def is_test_file(path: str) -> bool:
    """Return *True* for source files that look like tests by name or location."""
    if not is_code_file(path):
        return False
    name = filename(path).lower()
    if name in ("conftest.py", "__init__.py"):
        return False
    if name.startswith("test_") or any(marker in name for marker in TEST_NAME_MARKERS):
        return True
    dirs = path.lower().split("/")[:-1]
    return any(part in TEST_DIR_NAMES for part in dirs)


def normalise(path: str) -> str:
    """Use ``/`` separators and drop any leading ``./``."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.strip("/")
