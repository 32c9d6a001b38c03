"""Secret scanner — detects credentials committed into repository text files.

All regex patterns are pre-compiled.  The scanner only reports *where* and
*what kind* of secret it saw; matched values never leave this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ── Compiled patterns ───────────────────────────────────────────────────────

_SECRET_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    # AWS access key
    ("AWS_KEY", re.compile(r"AKIA[0-9A-Z]{16}")),
    # GitHub tokens
    ("GITHUB_TOKEN", re.compile(r"gh[pousr]_[A-Za-z0-9_]{36,}")),
    # Slack tokens
    ("SLACK_TOKEN", re.compile(r"xox[baprs]-[A-Za-z0-9-]{10,}")),
    # Generic API keys (key=value assignments)
    (
        "GENERIC_KEY",
        re.compile(
            r"(?:api[_\-]?key|apikey|secret[_\-]?key|access[_\-]?token|auth[_\-]?token)"
            r"""\s*[:=]\s*['"]?[A-Za-z0-9_\-/+]{20,}['"]?""",
            re.IGNORECASE,
        ),
    ),
    # Private keys (PEM)
    ("PRIVATE_KEY", re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----")),
    # Connection strings with inline credentials (postgres, mysql, mongo)
    (
        "CONN_STRING",
        re.compile(
            r"(?:postgres|postgresql|mysql|mongodb)(?:\+\w+)?://[^\s:/@]+:[^\s@]+@[^\s]{3,}",
            re.IGNORECASE,
        ),
    ),
]

# Extensions worth scanning; binaries and lock files are skipped.
SCANNABLE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".py", ".js", ".ts", ".tsx", ".jsx", ".mjs", ".cjs",
        ".go", ".rs", ".rb", ".java", ".kt", ".cs", ".php", ".sh",
        ".yml", ".yaml", ".toml", ".json", ".ini", ".cfg", ".conf",
        ".env", ".properties", ".tf", ".xml",
    }
)


# ── Result type ─────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SecretFinding:
    """One suspected secret: the file, 1-based line and the pattern label."""

    path: str
    line: int
    kind: str


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning a batch of files."""

    files_scanned: int
    findings: tuple[SecretFinding, ...] = field(default_factory=tuple)

    @property
    def clean(self) -> bool:
        return not self.findings


# ── Public API ──────────────────────────────────────────────────────────────


def is_scannable(path: str) -> bool:
    """Return *True* for text files whose extension is worth scanning."""
    name = path.rsplit("/", maxsplit=1)[-1].lower()
    if name.endswith((".example", ".sample", ".template")):
        return False
    dot = name.rfind(".")
    return dot != -1 and name[dot:] in SCANNABLE_EXTENSIONS


def scan_text(path: str, text: str) -> list[SecretFinding]:
    """Return every secret-pattern match in *text*, attributed to *path*."""
    findings: list[SecretFinding] = []
    for label, pattern in _SECRET_PATTERNS:
        for match in pattern.finditer(text):
            line = text.count("\n", 0, match.start()) + 1
            findings.append(SecretFinding(path=path, line=line, kind=label))
    findings.sort(key=lambda f: (f.line, f.kind))
    return findings


def scan_batch(texts: dict[str, str]) -> ScanResult:
    """Scan a mapping of ``{path: text}`` and aggregate the findings."""
    findings: list[SecretFinding] = []
    for path in sorted(texts):
        findings.extend(scan_text(path, texts[path]))
    return ScanResult(files_scanned=len(texts), findings=tuple(findings))
