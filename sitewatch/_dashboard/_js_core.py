"""JavaScript core functionality for the dashboard.

Renders one card per endpoint from each ``statusUpdate`` snapshot and
emits ``toggleSite`` with the endpoint URL when its button is pressed.
"""

JS_CORE = """
        const socket = io();
        const list = document.getElementById('siteList');
        const connection = document.getElementById('connection');

        function renderCard(url, data) {
            const card = document.createElement('div');
            card.className = 'card ' + data.status + (data.active ? '' : ' inactive');

            const label = document.createElement('div');
            label.className = 'url';
            label.textContent = url;

            const status = document.createElement('div');
            status.className = 'status ' + data.status;
            const dot = document.createElement('div');
            dot.className = 'dot';
            const text = document.createElement('span');
            text.textContent = data.status.toUpperCase();
            status.append(dot, text);

            const btn = document.createElement('button');
            btn.textContent = data.active ? 'Stop' : 'Start';
            btn.className = data.active ? 'stop' : '';
            btn.setAttribute('aria-label', (data.active ? 'Pause monitoring of ' : 'Resume monitoring of ') + url);
            btn.onclick = () => socket.emit('toggleSite', url);

            card.append(label, status, btn);
            return card;
        }

        function renderStatus(statusMap) {
            list.replaceChildren(
                ...Object.entries(statusMap).map(([url, data]) => renderCard(url, data))
            );
        }

        socket.on('connect', () => {
            connection.textContent = 'Live';
            connection.classList.remove('offline');
        });

        socket.on('disconnect', () => {
            connection.textContent = 'Disconnected - reconnecting...';
            connection.classList.add('offline');
        });

        socket.on('statusUpdate', renderStatus);
"""
