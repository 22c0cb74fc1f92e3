"""HTML dashboard for the monitoring web interface.

This package contains the embedded HTML/CSS/JS dashboard served at the root endpoint.
The dashboard renders whatever the server pushes on the ``statusUpdate`` event
and sends ``toggleSite`` when a Stop/Start button is pressed.
"""

from ._css import CSS_STYLES
from ._html import build_html
from ._js_core import JS_CORE

# Assemble the complete HTML dashboard
HTML_DASHBOARD = build_html(CSS_STYLES, JS_CORE)

__all__ = ["HTML_DASHBOARD"]
