"""
Per-tool installers.

Each module exposes one ``install_*(app_settings, current_logger=None)``
function that raises on failure of a required action.
"""
