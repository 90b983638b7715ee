"""Directories never descended into during source discovery.

HARDCODED_DIRS are always skipped. DEFAULT_PRUNABLE_DIRS are skipped unless
a path inside them is passed explicitly; ``files.excluded_dirs`` in the
config adds to them.
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
    )
)

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JavaScript/Node.js ecosystem
        # -------------------------------------------------------------------------
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        ".next",  # Next.js build
        ".nuxt",  # Nuxt.js build
        ".turbo",  # Turborepo cache
        ".parcel-cache",
        ".cache",
        "coverage",
        # -------------------------------------------------------------------------
        # Build output
        # -------------------------------------------------------------------------
        "dist",
        "build",
        "out",
        # -------------------------------------------------------------------------
        # Python tooling that may sit next to a JS tree
        # -------------------------------------------------------------------------
        "venv",
        ".venv",
        "__pycache__",
        ".pytest_cache",
        ".tox",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS
