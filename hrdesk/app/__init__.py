"""Application composition layer for the HR web UI.

``controller`` wires adapters and use cases from settings; ``query_cache``
holds resource snapshots and broadcasts invalidations.
"""
