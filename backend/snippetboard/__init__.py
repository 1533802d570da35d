"""
SnippetBoard Backend — Application Package Initializer
=======================================================

What: Marks the `snippetboard` directory as a Python package.
Who:  Imported by uvicorn (`snippetboard.main:app`), pytest and the console script.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │   Routes (HTML pages + JSON API)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   FeedService (request flows)       │  ← read-all / read-by-author / post
    ├─────────────────────────────────────┤
    │   AuthorDirectory │ SnippetStore    │  ← shared in-process registries
    │   FeedProjector                     │  ← snippet → display entry
    ├─────────────────────────────────────┤
    │   Models (Author, Snippet)          │  ← immutable dataclasses
    └─────────────────────────────────────┘

    Nothing is persisted: the store lives for the lifetime of the process.
"""

__version__ = "1.0.0"
