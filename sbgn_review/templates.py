"""HTML for the review page.

Keyboard: A accept, R reject, C clear, Up/Down move, Ctrl/Cmd+S save.
"""

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>SBGN Reviewer</title>
    <style>
        :root {
            color-scheme: dark;
            --bg: #101014;
            --surface: #181821;
            --surface-alt: #1f1f2c;
            --accent: #4f9dff;
            --danger: #ff6b6b;
            --success: #51cf66;
            --muted: #a0a3b1;
        }

        * { box-sizing: border-box; }

        body {
            font-family: "Inter", "Segoe UI", system-ui, -apple-system, sans-serif;
            margin: 0;
            background: var(--bg);
            color: #f8f9ff;
            height: 100vh;
            display: grid;
            grid-template-rows: auto 1fr;
        }

        header.toolbar {
            background: var(--surface);
            border-bottom: 1px solid var(--surface-alt);
            padding: 0.75rem 1.25rem;
            display: flex;
            align-items: center;
            gap: 12px;
        }

        header.toolbar h1 { margin: 0; font-size: 18px; font-weight: 600; }
        header.toolbar .counter { color: var(--muted); font-size: 14px; margin-left: auto; }

        button {
            background: var(--surface-alt);
            color: #f8f9ff;
            border: 1px solid #2c2c3c;
            border-radius: 6px;
            padding: 6px 12px;
            cursor: pointer;
        }
        button.accept { border-color: var(--success); }
        button.reject { border-color: var(--danger); }

        main {
            display: grid;
            grid-template-columns: 220px 1fr 1fr 1fr;
            min-height: 0;
        }

        #fileList { list-style: none; margin: 0; padding: 0; overflow-y: auto; background: var(--surface); }
        #fileList li { padding: 6px 12px; cursor: pointer; border-left: 3px solid transparent; font-size: 13px; }
        #fileList li.selected { background: var(--surface-alt); border-left-color: var(--accent); }
        #fileList li.status-accept { color: var(--success); }
        #fileList li.status-reject { color: var(--danger); }

        .pane { display: flex; flex-direction: column; min-height: 0; border-left: 1px solid var(--surface-alt); }
        .pane h2 { margin: 0; padding: 6px 12px; font-size: 13px; color: var(--muted); font-weight: 500; }
        .pane .image-wrap { flex: 1; overflow: auto; background: #fff; }
        .pane img { max-width: 100%; display: block; }

        #xmlEditor {
            flex: 1;
            width: 100%;
            background: var(--surface);
            color: #f8f9ff;
            border: none;
            padding: 8px;
            font-family: ui-monospace, monospace;
            font-size: 12px;
            resize: none;
        }

        #message { color: var(--muted); font-size: 13px; }
    </style>
</head>
<body>
    <header class="toolbar">
        <h1>SBGN Reviewer</h1>
        <span id="currentFile"></span>
        <button class="accept" id="acceptBtn">Accept (A)</button>
        <button class="reject" id="rejectBtn">Reject (R)</button>
        <button id="clearBtn">Clear (C)</button>
        <button id="saveBtn">Save</button>
        <span id="message"></span>
        <span class="counter" id="fileCounter" title="{{ config_path }}"></span>
    </header>
    <main>
        <ul id="fileList"></ul>
        <section class="pane">
            <h2>Old</h2>
            <div class="image-wrap"><img id="oldImage" alt="old rendering"></div>
        </section>
        <section class="pane">
            <h2>New</h2>
            <div class="image-wrap"><img id="newImage" alt="new rendering"></div>
        </section>
        <section class="pane">
            <h2>SBGN-ML</h2>
            <textarea id="xmlEditor" spellcheck="false"></textarea>
        </section>
    </main>
    <script>
        let files = [];
        let currentIndex = 0;
        const editor = document.getElementById('xmlEditor');
        const listEl = document.getElementById('fileList');

        async function fetchJson(url, options) {
            const response = await fetch(url, options);
            const body = await response.json();
            if (!response.ok) {
                throw new Error(body.error ? body.error.message : 'Request failed');
            }
            return body;
        }

        function flash(text) {
            const el = document.getElementById('message');
            el.textContent = text;
            setTimeout(() => { if (el.textContent === text) el.textContent = ''; }, 2000);
        }

        function render() {
            const accept = files.filter((f) => f.status === 'accept').length;
            const reject = files.filter((f) => f.status === 'reject').length;
            document.getElementById('fileCounter').textContent =
                `${files.length} files (${accept} accept, ${reject} reject, ${files.length - accept - reject} clear)`;
            listEl.innerHTML = '';
            files.forEach((file, index) => {
                const li = document.createElement('li');
                li.textContent = file.base;
                if (file.status) li.classList.add(`status-${file.status}`);
                if (index === currentIndex) li.classList.add('selected');
                li.addEventListener('click', () => select(index));
                listEl.appendChild(li);
            });
        }

        async function select(index) {
            if (!files.length) return;
            currentIndex = Math.min(Math.max(index, 0), files.length - 1);
            const file = files[currentIndex];
            const base = encodeURIComponent(file.base);
            document.getElementById('currentFile').textContent = file.base;
            document.getElementById('oldImage').src = `/api/image/old/${base}`;
            document.getElementById('newImage').src = `/api/image/new/${base}`;
            const data = await fetchJson(`/api/file/${base}`);
            editor.value = data.xml || '';
            file.status = data.status;
            render();
            const selected = listEl.querySelector('li.selected');
            if (selected) selected.scrollIntoView({ block: 'nearest' });
        }

        async function post(url, body) {
            return fetchJson(url, {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify(body),
            });
        }

        async function setStatus(status) {
            const file = files[currentIndex];
            if (!file) return;
            await post('/api/status', { base: file.base, status });
            file.status = status;
            render();
        }

        async function save() {
            const file = files[currentIndex];
            if (!file) return;
            await post('/api/save', { base: file.base, xml: editor.value });
            flash('Saved');
        }

        document.getElementById('acceptBtn').addEventListener('click', () => setStatus('accept'));
        document.getElementById('rejectBtn').addEventListener('click', () => setStatus('reject'));
        document.getElementById('clearBtn').addEventListener('click', () => setStatus(null));
        document.getElementById('saveBtn').addEventListener('click', save);

        document.addEventListener('keydown', (event) => {
            if ((event.ctrlKey || event.metaKey) && event.key.toLowerCase() === 's') {
                event.preventDefault();
                save().catch((err) => flash(err.message));
                return;
            }
            if (document.activeElement === editor) return;
            const actions = {
                a: () => setStatus('accept'),
                r: () => setStatus('reject'),
                c: () => setStatus(null),
                arrowdown: () => select(currentIndex + 1),
                arrowup: () => select(currentIndex - 1),
            };
            const action = actions[event.key.toLowerCase()];
            if (action) {
                event.preventDefault();
                action().catch((err) => flash(err.message));
            }
        });

        fetchJson('/api/files')
            .then((data) => {
                files = data.files || [];
                render();
                return select(0);
            })
            .catch((err) => flash(err.message));
    </script>
</body>
</html>
"""
