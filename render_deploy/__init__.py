# render_deploy/__init__.py
"""Trigger a Render deploy and optionally wait for it to go live."""

__version__ = "1.2.0"

RENDER_API_BASE = "https://api.render.com"
