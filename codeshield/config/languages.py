"""Languages offered by the scan and best-practices forms."""

from __future__ import annotations

# Display order of the language pickers
SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "JavaScript",
    "Python",
    "Java",
    "C++",
    "C#",
    "TypeScript",
    "PHP",
    "Ruby",
    "Go",
    "Swift",
    "Kotlin",
    "Rust",
    "SQL",
    "HTML",
    "CSS",
)

_SUPPORTED_SET = frozenset(SUPPORTED_LANGUAGES)

# File picker filter for "Upload File". Advisory only, never enforced server-side.
UPLOAD_EXTENSIONS: tuple[str, ...] = (
    ".js", ".ts", ".jsx", ".tsx", ".py", ".java", ".cpp", ".h", ".cs",
    ".php", ".rb", ".go", ".swift", ".kt", ".rs", ".sql", ".html", ".css",
)

UPLOAD_ACCEPT = ",".join(UPLOAD_EXTENSIONS)


def is_supported_language(language: str) -> bool:
    """Exact, case-sensitive membership test against the picker values."""
    return language in _SUPPORTED_SET
