"""Obsidian vault core: projects, bugs, session logs, search.

Layout:
    <vault>/
    ├── <Project>/
    │   ├── !Project Dashboard.md      # Frontmatter: status, description, tags…
    │   ├── README.md
    │   ├── BUG - <title>.md           # One document per bug
    │   └── Sessions/
    │       └── Session - 2026-02-18.md  # Per-day log (append-only)
    └── …

The vault root is resolved from ~/.config/obsidian-tracker/config.json, falling
back to $OBSIDIAN_VAULT. Markdown files are the only store: nothing is cached
between operations.
"""
