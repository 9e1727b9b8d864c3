"""Reading SDL sources from disk.

A schema may be one file or a directory tree of ``.graphql`` /
``.graphqls`` files. Directory contents are joined in sorted path order
into one document, so positions in diagnostics count lines of the joined
text.
"""

import logging
import os

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".graphql", ".graphqls")


def collect_schema_files(schema_path: str) -> list[str]:
    """Collect all schema files under a path, sorted."""
    if os.path.isfile(schema_path):
        return [schema_path]
    files = []
    for root, _, filenames in os.walk(schema_path):
        for filename in filenames:
            if filename.endswith(SCHEMA_SUFFIXES):
                files.append(os.path.join(root, filename))
    return sorted(files)


def load_schema_source(schema_path: str) -> str:
    """Return the SDL text of a schema file or directory.

    Raises:
        FileNotFoundError: If the path holds no schema files.
    """
    files = collect_schema_files(schema_path)
    if not files:
        raise FileNotFoundError(f"No schema files found in {schema_path}")

    parts = []
    for file_path in files:
        logger.debug("Reading %s", file_path)
        with open(file_path) as f:
            parts.append(f.read())
    return "\n".join(parts)
