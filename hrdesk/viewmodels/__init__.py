"""ViewModel package for UI state and command surfaces.

Call context:
    ``hrdesk/web_ui/runtime.py`` builds these view models and
    ``hrdesk/web_ui/main.py`` binds NiceGUI widgets to them.

Dependencies:
    Modules in this package depend on domain types, notification payloads and
    resource names only. I/O adapters and use-case orchestration remain outside;
    use cases arrive as injected callables.

Responsibilities:
    - Derive display rows, cards and labels from domain snapshots.
    - Validate form input and build request payloads.
    - Report mutation outcomes through ``on_notify`` / ``on_invalidate``.
"""
