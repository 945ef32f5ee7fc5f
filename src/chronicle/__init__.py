"""Chronicle - changelog rendering from structured release data.

Chronicle renders a changelog from releases and their (already classified)
commits using a Jinja2 template. Templates get two filters on top of the
Jinja2 builtins:
- upper_first: uppercase the first character of a string
- commit_groups: group commits in a caller-declared group order

Core principles:
- Deterministic: Same releases and template always produce the same text
- Typed failures: Template problems surface as ChronicleError subclasses
- Read-only: Release data is never modified while rendering
"""

__version__ = "0.1.0"
__author__ = "Chronicle Contributors"
