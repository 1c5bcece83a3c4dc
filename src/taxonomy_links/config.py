"""Configuration constants for taxonomy-links."""

from pathlib import Path

# Directory with the taxonomy database. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/taxonomy-links").expanduser(),
    Path("~/.taxonomy-links").expanduser(),
    Path("~/.config/taxonomy-links").expanduser(),
]

# Used when none of DATA_DIRECTORIES exists yet.
DEFAULT_DATA_DIR: Path = DATA_DIRECTORIES[0]

DATABASE_FILENAME = "taxonomy.db"

# Canonical route of a taxonomy term page.
TERM_URL_TEMPLATE = "/taxonomy/term/{tid}"


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the default one."""
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DEFAULT_DATA_DIR
