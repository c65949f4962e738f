# Content-type negotiation for uploads, keyed by file extension.
# Created: 2026-03-05

from __future__ import annotations

import posixpath

OCTET_STREAM = "application/octet-stream"

# The repository has always been sent this form (no space before charset);
# it is kept as-is for the plain-text group.
LEGACY_TEXT = "text/plain;charset=UTF-8"

TEXT_CONTENT_TYPES: dict[str, str] = {
    # source
    ".js": "application/javascript",
    ".xsjs": "application/javascript",
    ".xsjslib": "application/javascript",
    ".ts": LEGACY_TEXT,
    ".json": "application/json",
    ".xsaccess": "application/json",
    ".xsapp": "application/json",
    ".xsprivileges": "application/json",
    ".xsodata": LEGACY_TEXT,
    ".hdbprocedure": LEGACY_TEXT,
    ".hdbfunction": LEGACY_TEXT,
    ".hdbtable": LEGACY_TEXT,
    ".hdbview": LEGACY_TEXT,
    ".hdbdd": LEGACY_TEXT,
    ".hdbrole": LEGACY_TEXT,
    ".hdbsequence": LEGACY_TEXT,
    ".hdbschema": LEGACY_TEXT,
    ".hdbcalculationview": "application/xml",
    ".calculationview": "application/xml",
    ".sql": LEGACY_TEXT,
    # markup and text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".xml": "application/xml",
    ".md": LEGACY_TEXT,
    ".txt": LEGACY_TEXT,
    ".csv": "text/csv",
    ".properties": LEGACY_TEXT,
}


def content_type_for(path: str) -> str:
    """Content type sent with a PUT of ``path``."""
    name = posixpath.basename(path).lower()
    _, ext = posixpath.splitext(name)
    if not ext and name.startswith("."):
        # .xsaccess, .xsapp, ...
        ext = name
    return TEXT_CONTENT_TYPES.get(ext, OCTET_STREAM)
