# Services package init
"""
SnippetBoard Backend — Services Layer
=======================================

What:  Everything between the routes (HTTP) and the models.

Service Inventory:
    - AuthorDirectory: read-only registry of known authors
    - SnippetStore (abstract) / InMemorySnippetStore: the append-only,
      thread-safe snippet log
    - FeedProjector: stateless snippet → FeedEntry transform
    - FeedService: the read-all, read-by-author and post flows

The directory and the store are built once by the application factory and
shared by every request; the projector and feed service hold no mutable state
of their own.
"""
