"""State layer.

Source priorities, the reconciler that merges partial facts, and the
per-domain TTL cache holding last-known-good records.
"""
