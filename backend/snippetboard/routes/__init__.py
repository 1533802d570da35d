# Routes package init
"""
SnippetBoard Backend — Routes Package
=======================================

Route Inventory:
    - pages.py:     GET  /                              (global feed page + form)
                    POST /                              (post from the form, 303 → /)
                    GET  /authors/{author_id}           (author feed page)
    - snippets.py:  GET  /api/snippets                  (global feed, JSON)
                    POST /api/snippets                  (post a snippet, JSON)
                    GET  /api/authors                   (author directory)
                    GET  /api/authors/{author_id}/snippets
    - health.py:    GET  /health

Routes stay thin: pull inputs off the request, call FeedService, render.
Feed handlers are plain `def` functions, so FastAPI runs them on its worker
thread pool and requests reach the snippet store in parallel.
"""
