"""
Restaurant Finder.

- ``search``: client-side search/sort orchestration (state, HTTP client, view).
- ``restaurants``: reference backend for the ``/api/restaurants`` contract.
"""
