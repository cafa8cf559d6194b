"""Task model, in-memory store and engine.

The engine is the only public entry-point for task manipulation; the HTTP
router and the tests both drive it.
"""
