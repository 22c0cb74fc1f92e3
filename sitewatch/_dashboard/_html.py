"""HTML template for the dashboard."""

from string import Template

# Socket.IO client matching the python-socketio 5.x protocol
SOCKETIO_CLIENT_URL = "https://cdn.socket.io/4.7.5/socket.io.min.js"

_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>SiteWatch // Service Monitor</title>
    <style>
$css
    </style>
</head>
<body>
    <h1>SiteWatch</h1>
    <p class="connection" id="connection" role="status">Connecting...</p>
    <div class="list" id="siteList" aria-live="polite"></div>

    <script src="$socketio_client_url" crossorigin="anonymous"></script>
    <script>
$js_core
    </script>
</body>
</html>
""")


def build_html(css: str, js_core: str) -> str:
    """Build the complete HTML dashboard from its components.

    Uses string.Template for safe substitution of CSS and JavaScript content.

    Args:
        css: CSS styles string
        js_core: JavaScript rendering and socket handling string

    Returns:
        Complete HTML dashboard string
    """
    return _TEMPLATE.safe_substitute(
        css=css,
        js_core=js_core,
        socketio_client_url=SOCKETIO_CLIENT_URL,
    )
