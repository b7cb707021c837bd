"""
Static admin dashboard consuming ``/api/admin/responses``.
"""

DASHBOARD_PAGE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>Survey Responses - Admin</title>
    <style>
      body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif;margin:20px}
      table{width:100%;border-collapse:collapse}
      th,td{padding:8px;border:1px solid #e6e6e6;text-align:left;vertical-align:top}
      th{background:#f7f7f7}
      .controls{margin-bottom:12px}
      .small{font-size:0.9em;color:#666}
    </style>
  </head>
  <body>
    <h1>Survey Responses</h1>
    <div class="controls">
      <input id="q" placeholder="Search by email or meeting title" style="width:300px;padding:6px" />
      <button id="search">Search</button>
      <button id="refresh">Refresh</button>
      <button id="prev">Previous</button>
      <button id="next">Next</button>
      <span class="small">(Page <span id="page">1</span>)</span>
    </div>
    <div id="summary" class="small"></div>
    <div style="overflow:auto;max-height:70vh">
      <table id="results">
        <thead>
          <tr>
            <th>Submitted At</th>
            <th>Participant</th>
            <th>Meeting</th>
            <th>Scores</th>
            <th>Most Valuable</th>
            <th>Improvements</th>
            <th>Raw</th>
          </tr>
        </thead>
        <tbody></tbody>
      </table>
    </div>

    <script>
      const pageEl = document.getElementById('page');
      const qInput = document.getElementById('q');
      const limit = 50;
      let page = 1;
      let total = 0;

      function adminToken() {
        return new URLSearchParams(location.search).get('token') || '';
      }

      function escapeHtml(value) {
        return String(value === null || value === undefined ? '' : value)
          .replaceAll('&', '&amp;')
          .replaceAll('<', '&lt;')
          .replaceAll('>', '&gt;')
          .replaceAll('"', '&quot;')
          .replaceAll("'", '&#039;');
      }

      async function getJson(params) {
        const token = adminToken();
        if (token) params.set('token', token);
        const res = await fetch('/api/admin/responses?' + params.toString(), {
          headers: token ? { 'x-admin-token': token } : {},
        });
        return res.json();
      }

      async function fetchPage() {
        const params = new URLSearchParams({ page: String(page), limit: String(limit) });
        const q = qInput.value.trim();
        if (q) params.set('q', q);
        const data = await getJson(params);
        if (!data.success) {
          document.getElementById('summary').innerText = 'Failed to load responses';
          return;
        }
        total = data.total;
        pageEl.innerText = data.page;
        document.getElementById('summary').innerText =
          'Showing ' + data.results.length + ' of ' + data.total + ' responses';
        const tbody = document.querySelector('#results tbody');
        tbody.innerHTML = '';

        data.results.forEach(function (r) {
          const tr = document.createElement('tr');
          const scores = [r.punctuality, r.listening_understanding, r.knowledge_expertise,
                          r.clarity_answers, r.overall_value].join(' / ');
          tr.innerHTML =
            '<td>' + escapeHtml(new Date(r.submitted_at).toLocaleString()) + '</td>' +
            '<td>' + escapeHtml(r.participant_name) + '<br/><small>' + escapeHtml(r.participant_email) + '</small></td>' +
            '<td>' + escapeHtml(r.meeting_title) + '</td>' +
            '<td>' + escapeHtml(scores) + '</td>' +
            '<td>' + escapeHtml(r.most_valuable) + '</td>' +
            '<td>' + escapeHtml(r.improvements) + '</td>' +
            '<td><button data-id="' + escapeHtml(r.id) + '">View</button></td>';
          tbody.appendChild(tr);
        });

        document.querySelectorAll('#results button[data-id]').forEach(function (btn) {
          btn.addEventListener('click', async function () {
            const data = await getJson(new URLSearchParams({ id: btn.getAttribute('data-id') }));
            if (data.success && data.result) {
              alert(JSON.stringify(data.result, null, 2));
            } else {
              alert('Failed to load response');
            }
          });
        });
      }

      document.getElementById('search').addEventListener('click', function () { page = 1; fetchPage(); });
      document.getElementById('refresh').addEventListener('click', function () { fetchPage(); });
      document.getElementById('prev').addEventListener('click', function () {
        if (page > 1) { page -= 1; fetchPage(); }
      });
      document.getElementById('next').addEventListener('click', function () {
        if (page * limit < total) { page += 1; fetchPage(); }
      });

      fetchPage();
    </script>
  </body>
</html>
"""
