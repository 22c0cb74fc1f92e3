"""CSS styles for the dashboard."""

CSS_STYLES = """
        :root {
            --bg-dark: #0f172a;
            --bg-panel: #1e293b;
            --accent: #38bdf8;
            --accent-hover: #0ea5e9;
            --green: #22c55e;
            --red: #ef4444;
            --red-hover: #dc2626;
            --grey: #94a3b8;
            --text: #e2e8f0;
        }

        body {
            font-family: "Inter", system-ui, sans-serif;
            background: var(--bg-dark);
            color: var(--text);
            margin: 0;
            padding: 2rem;
        }

        h1 {
            text-align: center;
            margin-bottom: 0.5rem;
            color: var(--accent);
        }

        .connection {
            text-align: center;
            color: var(--grey);
            margin: 0 0 2rem;
            font-size: 0.85rem;
        }

        .connection.offline { color: var(--red); }

        .list {
            max-width: 650px;
            margin: 0 auto;
            display: flex;
            flex-direction: column;
            gap: 1rem;
        }

        .card {
            background: var(--bg-panel);
            border-radius: 10px;
            padding: 1rem 1.5rem;
            box-shadow: 0 2px 5px rgba(0, 0, 0, 0.3);
            display: flex;
            align-items: center;
            justify-content: space-between;
            transition: background 0.3s ease, opacity 0.3s ease;
        }

        .card.inactive { opacity: 0.5; }

        .url {
            flex: 1;
            word-break: break-all;
        }

        .status {
            display: flex;
            align-items: center;
            gap: 0.4rem;
            font-weight: 600;
            margin-right: 1rem;
        }

        .dot {
            width: 12px;
            height: 12px;
            border-radius: 50%;
        }

        .online .dot { background: var(--green); }
        .offline .dot { background: var(--red); }
        .unknown .dot { background: var(--grey); }

        button {
            background: var(--accent);
            border: none;
            color: var(--bg-dark);
            padding: 0.4rem 0.8rem;
            border-radius: 5px;
            font-weight: 600;
            cursor: pointer;
            transition: all 0.2s;
        }

        button:hover { background: var(--accent-hover); }

        button.stop {
            background: var(--red);
            color: white;
        }

        button.stop:hover { background: var(--red-hover); }
"""
