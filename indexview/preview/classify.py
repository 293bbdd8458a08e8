"""Extension tables deciding which inline viewer a listing entry gets."""

from __future__ import annotations

from ..listing.types import Entry, PreviewCategory

PREVIEW_IMAGE = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico", "avif"})
PREVIEW_VIDEO = frozenset({"mp4", "webm", "ogg"})
PREVIEW_AUDIO = frozenset({"mp3", "wav", "ogg", "aac", "flac", "m4a", "opus"})
PREVIEW_PDF = frozenset({"pdf"})
PREVIEW_TEXT = frozenset(
    {
        "txt", "log", "md", "json", "xml", "yml", "yaml", "csv", "ini", "cfg", "conf", "toml",
        "py", "js", "ts", "jsx", "tsx", "css", "html", "htm", "java", "c", "cpp", "h", "hpp",
        "cs", "go", "rs", "rb", "php", "sh", "bash", "bat", "ps1", "sql", "vue", "svelte",
        "lua", "r", "swift", "kt", "scala", "dart", "rtf",
    }
)

# Checked in order; the first table containing the extension wins.
PREVIEW_TABLES: tuple[tuple[PreviewCategory, frozenset[str]], ...] = (
    ("image", PREVIEW_IMAGE),
    ("video", PREVIEW_VIDEO),
    ("audio", PREVIEW_AUDIO),
    ("pdf", PREVIEW_PDF),
    ("text", PREVIEW_TEXT),
)

KIND_TABLES: tuple[tuple[str, frozenset[str]], ...] = (
    ("archive", frozenset({"zip", "rar", "7z", "tar", "gz", "bz2", "xz", "tgz", "zst", "lz4", "cab", "iso", "dmg"})),
    ("image", frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico", "tiff", "tif", "avif", "heic"})),
    ("video", frozenset({"mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "mpg", "mpeg", "ts", "3gp"})),
    ("audio", frozenset({"mp3", "wav", "flac", "aac", "ogg", "wma", "m4a", "opus", "ape", "alac"})),
    (
        "code",
        frozenset(
            {
                "html", "htm", "css", "js", "ts", "jsx", "tsx", "json", "xml", "yml", "yaml",
                "py", "java", "c", "cpp", "h", "hpp", "cs", "go", "rs", "rb", "php", "sh",
                "bash", "bat", "ps1", "sql", "md", "vue", "svelte", "toml", "ini", "cfg",
                "conf", "lua", "r", "swift", "kt", "scala", "dart",
            }
        ),
    ),
    ("pdf", frozenset({"pdf"})),
    ("document", frozenset({"doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp", "csv", "txt", "rtf", "log"})),
)


def file_extension(filename: str) -> str:
    """Lowercased text after the final dot; empty when there is no dot."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def classify(filename: str, is_dir: bool = False, is_parent: bool = False) -> PreviewCategory:
    """Return the preview category for ``filename``."""
    if is_dir or is_parent:
        return "none"
    extension = file_extension(filename)
    if not extension:
        return "none"
    for category, extensions in PREVIEW_TABLES:
        if extension in extensions:
            return category
    return "none"


def classify_entry(entry: Entry) -> PreviewCategory:
    return classify(entry.name, entry.is_dir, entry.is_parent)


def file_kind(filename: str, is_dir: bool = False) -> str:
    """Coarse listing kind used for colouring rows (``folder``, ``code``, ...)."""
    if is_dir:
        return "folder"
    extension = file_extension(filename)
    for kind, extensions in KIND_TABLES:
        if extension in extensions:
            return kind
    return "file"


__all__ = [
    "PREVIEW_IMAGE",
    "PREVIEW_VIDEO",
    "PREVIEW_AUDIO",
    "PREVIEW_PDF",
    "PREVIEW_TEXT",
    "PREVIEW_TABLES",
    "KIND_TABLES",
    "file_extension",
    "classify",
    "classify_entry",
    "file_kind",
]
