"""
Client-side search orchestration.

Responsibilities:
- Hold the single search state (location, sort field, sort order, results).
- Issue restaurant searches against the backend and reconcile responses.
- Re-issue the active search whenever the sort parameters change.
- Describe what the UI should currently show for a given state.
"""
