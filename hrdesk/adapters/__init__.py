"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (the HR REST API, the
    local settings file, and an in-memory demo backend) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``hrdesk.app.controller`` (for runtime wiring) and by tests
    (for the demo backend and transport-level behavior verification).
"""
