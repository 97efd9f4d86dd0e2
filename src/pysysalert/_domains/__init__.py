"""Per-domain probe → extract → reconcile pipelines.

Internal to pysysalert; each module exposes the command specs for its
sources and one ``refresh_*`` coroutine used as a cache refresh.
"""
