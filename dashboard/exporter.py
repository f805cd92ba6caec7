"""Render company datasets into a self-contained HTML dashboard."""
from __future__ import annotations
import json
from html import escape
from pathlib import Path
from typing import Dict, Optional

from rich.console import Console

from .aggregate import with_aggregate
from .config import DashboardConfig
from .records import Category

console = Console()

FONTS_URL = (
    "https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500"
    "&family=Outfit:wght@400;500;600;700&display=swap"
)

REPORT_STYLE = """
    :root, body.theme-dark {
      --bg: #0d0f14;
      --surface: #151922;
      --surface-hover: #1c202a;
      --border: #2a3142;
      --text: #e6e9f0;
      --text-muted: #8b92a8;
      --accent: #7c9cf9;
      --accent-dim: #5a7ae0;
      --easy: #6bcf7f;
      --medium: #e6b84a;
      --hard: #e06c75;
      --radius: 10px;
      --shadow: 0 4px 24px rgba(0,0,0,0.4);
    }
    body.theme-light {
      --bg: #f2f4f8;
      --surface: #ffffff;
      --surface-hover: #e8ecf4;
      --border: #d0d7e3;
      --text: #1a1d26;
      --text-muted: #5c6378;
      --accent: #4f6af6;
      --accent-dim: #3d52c7;
      --easy: #2d8f4e;
      --medium: #b8860b;
      --hard: #c5303a;
      --shadow: 0 4px 24px rgba(0,0,0,0.08);
    }
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body {
      font-family: 'Outfit', sans-serif;
      background: var(--bg);
      color: var(--text);
      min-height: 100vh;
      line-height: 1.5;
    }
    .layout { display: flex; min-height: 100vh; }
    .sidebar {
      width: 280px;
      flex-shrink: 0;
      background: var(--surface);
      border-right: 1px solid var(--border);
      padding: 1.25rem 0;
      overflow-y: auto;
      max-height: 100vh;
      transition: transform 0.2s ease, margin-left 0.2s ease;
    }
    .sidebar h2 {
      font-size: 0.75rem;
      font-weight: 600;
      text-transform: uppercase;
      letter-spacing: 0.08em;
      color: var(--text-muted);
      padding: 0 1.25rem 0.75rem;
      border-bottom: 1px solid var(--border);
      margin-bottom: 0.75rem;
    }
    .search-wrap { padding: 0 1rem 0.75rem; }
    .search {
      width: 100%;
      padding: 0.6rem 0.75rem;
      border: 1px solid var(--border);
      border-radius: 8px;
      background: var(--bg);
      color: var(--text);
      font-family: inherit;
      font-size: 0.9rem;
    }
    .search::placeholder { color: var(--text-muted); }
    .search:focus {
      outline: none;
      border-color: var(--accent);
      box-shadow: 0 0 0 2px rgba(124,156,249,0.2);
    }
    .company-btn {
      display: block;
      width: 100%;
      padding: 0.55rem 1.25rem;
      border: none;
      background: transparent;
      color: var(--text);
      font-family: inherit;
      font-size: 0.9rem;
      text-align: left;
      cursor: pointer;
      transition: background 0.15s, color 0.15s;
    }
    .company-btn:hover { background: var(--surface-hover); color: var(--accent); }
    .company-btn.active {
      background: rgba(124,156,249,0.15);
      color: var(--accent);
      font-weight: 500;
    }
    .main { flex: 1; padding: 1.5rem 2rem; overflow-y: auto; }
    .main h1 { font-size: 1.5rem; font-weight: 600; margin-bottom: 0.5rem; color: var(--text); }
    .main .sub { color: var(--text-muted); font-size: 0.9rem; margin-bottom: 1.5rem; }
    .table-wrap {
      background: var(--surface);
      border: 1px solid var(--border);
      border-radius: var(--radius);
      overflow: hidden;
      box-shadow: var(--shadow);
    }
    .data-table { width: 100%; border-collapse: collapse; font-size: 0.875rem; }
    .data-table th {
      text-align: left;
      padding: 0.85rem 1rem;
      background: var(--surface-hover);
      color: var(--text-muted);
      font-weight: 600;
      font-size: 0.75rem;
      text-transform: uppercase;
      letter-spacing: 0.04em;
      border-bottom: 1px solid var(--border);
    }
    .data-table td { padding: 0.7rem 1rem; border-bottom: 1px solid var(--border); }
    .data-table tr:last-child td { border-bottom: none; }
    .data-table tbody tr:hover { background: var(--surface-hover); }
    .data-table .diff { font-weight: 500; }
    .data-table .diff.easy { color: var(--easy); }
    .data-table .diff.medium { color: var(--medium); }
    .data-table .diff.hard { color: var(--hard); }
    .data-table .title { font-weight: 500; color: var(--text); }
    .data-table a { color: var(--accent); text-decoration: none; }
    .data-table a:hover { text-decoration: underline; }
    .data-table .topics { color: var(--text-muted); font-size: 0.8rem; max-width: 220px; }
    .data-table .freq, .data-table .accept {
      font-family: 'JetBrains Mono', monospace;
      font-size: 0.8rem;
      color: var(--text-muted);
    }
    .empty-state { text-align: center; padding: 4rem 2rem; color: var(--text-muted); }
    .empty-state p { margin-bottom: 0.5rem; }
    .header-row {
      display: flex; align-items: center; justify-content: space-between;
      flex-wrap: wrap; gap: 1rem; margin-bottom: 0.5rem;
    }
    .header-left { display: inline-flex; align-items: center; gap: 0.75rem; }
    .sidebar-toggle {
      display: inline-flex; align-items: center; justify-content: center;
      width: 32px; height: 32px;
      border-radius: 999px;
      border: 1px solid var(--border);
      background: var(--surface);
      color: var(--text);
      cursor: pointer;
      padding: 0;
      transition: background 0.15s, border-color 0.15s, transform 0.15s;
    }
    .sidebar-toggle:hover {
      background: var(--surface-hover);
      border-color: var(--accent);
      transform: translateX(1px);
    }
    .sidebar-toggle span { font-size: 1.1rem; line-height: 1; }
    .theme-toggle {
      display: inline-flex; align-items: center; gap: 0.5rem;
      padding: 0.5rem 0.85rem;
      border: 1px solid var(--border);
      border-radius: 8px;
      background: var(--surface);
      color: var(--text);
      font-family: inherit; font-size: 0.85rem;
      cursor: pointer;
      transition: background 0.15s, border-color 0.15s;
    }
    .theme-toggle:hover { background: var(--surface-hover); border-color: var(--accent); }
    .theme-toggle svg { width: 1.1em; height: 1.1em; }
    .filters {
      display: flex; flex-wrap: wrap; align-items: center; gap: 1rem;
      padding: 0.85rem 0; margin-bottom: 0.5rem;
      border-bottom: 1px solid var(--border);
    }
    .filters label { font-size: 0.8rem; color: var(--text-muted); margin-right: 0.25rem; }
    .filter-diff { display: flex; align-items: center; gap: 0.75rem; flex-wrap: wrap; }
    .filter-diff span { display: inline-flex; align-items: center; gap: 0.35rem; cursor: pointer; font-size: 0.85rem; }
    .filter-diff input { cursor: pointer; accent-color: var(--accent); }
    .filter-freq, .filter-accept { display: flex; align-items: center; gap: 0.5rem; }
    .filter-freq input, .filter-accept input {
      width: 4.5rem; padding: 0.4rem 0.5rem;
      border: 1px solid var(--border); border-radius: 6px;
      background: var(--surface); color: var(--text);
      font-family: 'JetBrains Mono', monospace; font-size: 0.85rem;
    }
    .filter-freq input:focus, .filter-accept input:focus { outline: none; border-color: var(--accent); }
    .col-done { width: 2.5rem; text-align: center; vertical-align: middle; }
    .col-done input { cursor: pointer; accent-color: var(--accent); }
    .data-table tr.row-done .title { text-decoration: line-through; opacity: 0.7; }
    body.sidebar-collapsed .sidebar { margin-left: -280px; border-right: none; }
    @media (max-width: 900px) {
      .layout { flex-direction: column; }
      .sidebar { width: 100%; max-height: 240px; border-right: none; border-bottom: 1px solid var(--border); }
      body.sidebar-collapsed .sidebar { margin-left: 0; display: none; }
    }
"""

REPORT_SCRIPT = """
    function createStorage(backend) {
      return {
        get(key) {
          try { return backend ? backend.getItem(key) : null; } catch (e) { return null; }
        },
        set(key, value) {
          try { if (backend) backend.setItem(key, value); } catch (e) { /* storage full or blocked */ }
        },
        remove(key) {
          try { if (backend) backend.removeItem(key); } catch (e) { /* storage blocked */ }
        }
      };
    }

    function browserStorage() {
      try { return window.localStorage; } catch (e) { return null; }
    }

    const storage = createStorage(browserStorage());

    const appState = {
      selected: null,
      headers: null,
      data: null
    };

    const searchEl = document.getElementById('search');
    const listEl = document.getElementById('company-list');
    const titleEl = document.getElementById('company-title');
    const subEl = document.getElementById('company-sub');
    const tableContainer = document.getElementById('table-container');
    const filtersBar = document.getElementById('filters-bar');
    const themeToggle = document.getElementById('theme-toggle');
    const themeIconDark = document.getElementById('theme-icon-dark');
    const themeIconLight = document.getElementById('theme-icon-light');
    const themeLabel = document.getElementById('theme-label');
    const sidebarToggle = document.getElementById('sidebar-toggle');

    function escapeHtml(value) {
      return String(value == null ? '' : value)
        .replace(/&/g, '&amp;')
        .replace(/</g, '&lt;')
        .replace(/>/g, '&gt;')
        .replace(/"/g, '&quot;')
        .replace(/'/g, '&#x27;');
    }

    function parseNumber(value) {
      const n = parseFloat(value);
      return isNaN(n) ? null : n;
    }

    // Theme

    function applyTheme(theme) {
      document.body.classList.toggle('theme-light', theme === 'light');
      document.body.classList.toggle('theme-dark', theme === 'dark');
      themeIconDark.style.display = theme === 'dark' ? 'block' : 'none';
      themeIconLight.style.display = theme === 'light' ? 'block' : 'none';
      themeLabel.textContent = theme === 'dark' ? 'Light' : 'Dark';
    }

    function savedTheme() {
      const saved = storage.get(STORAGE_KEYS.theme);
      return saved === 'light' ? 'light' : 'dark';
    }

    themeToggle.addEventListener('click', () => {
      const next = document.body.classList.contains('theme-light') ? 'dark' : 'light';
      applyTheme(next);
      storage.set(STORAGE_KEYS.theme, next);
    });
    applyTheme(savedTheme());

    // Sidebar

    function updateSidebarToggleAria() {
      const collapsed = document.body.classList.contains('sidebar-collapsed');
      sidebarToggle.setAttribute('aria-expanded', (!collapsed).toString());
    }

    sidebarToggle.addEventListener('click', () => {
      const collapsed = document.body.classList.toggle('sidebar-collapsed');
      storage.set(STORAGE_KEYS.sidebar, collapsed ? 'collapsed' : 'expanded');
      updateSidebarToggleAria();
    });
    if (storage.get(STORAGE_KEYS.sidebar) === 'collapsed') {
      document.body.classList.add('sidebar-collapsed');
    }
    updateSidebarToggleAria();

    // Completion

    function getCompletedSet() {
      try {
        const raw = storage.get(STORAGE_KEYS.completed);
        const parsed = raw ? JSON.parse(raw) : [];
        return new Set(Array.isArray(parsed) ? parsed.filter(v => typeof v === 'string') : []);
      } catch (e) {
        return new Set();
      }
    }

    function setCompleted(link, done) {
      const links = getCompletedSet();
      if (done) links.add(link); else links.delete(link);
      storage.set(STORAGE_KEYS.completed, JSON.stringify([...links].sort()));
    }

    // Filters

    function inputNumber(id) {
      const raw = document.getElementById(id).value.trim();
      return raw === '' ? null : parseNumber(raw);
    }

    function getFilterState() {
      return {
        difficulties: {
          easy: document.getElementById('filter-easy').checked,
          medium: document.getElementById('filter-medium').checked,
          hard: document.getElementById('filter-hard').checked
        },
        freqMin: inputNumber('filter-freq-min'),
        freqMax: inputNumber('filter-freq-max'),
        acceptMin: inputNumber('filter-accept-min'),
        acceptMax: inputNumber('filter-accept-max')
      };
    }

    function within(value, low, high) {
      if (value == null) return true;
      if (low != null && value < low) return false;
      if (high != null && value > high) return false;
      return true;
    }

    function applyFilters(data) {
      const state = getFilterState();
      return data.filter(row => {
        const diff = String(row.Difficulty || '').trim().toLowerCase();
        if (Object.prototype.hasOwnProperty.call(state.difficulties, diff) && !state.difficulties[diff]) {
          return false;
        }
        if (!within(parseNumber(row.Frequency), state.freqMin, state.freqMax)) return false;
        const accept = parseNumber(row['Acceptance Rate']);
        return within(accept == null ? null : accept * 100, state.acceptMin, state.acceptMax);
      });
    }

    // Company list

    function renderCompanyList(query) {
      const needle = (query || '').toLowerCase();
      const names = needle
        ? CATEGORY_NAMES.filter(n => n.toLowerCase().includes(needle))
        : CATEGORY_NAMES;
      listEl.innerHTML = names.map(name => {
        const idx = CATEGORY_NAMES.indexOf(name);
        const active = appState.selected === name ? ' active' : '';
        return '<button type="button" class="company-btn' + active + '" data-idx="' + idx + '">' + escapeHtml(name) + '</button>';
      }).join('');
      listEl.querySelectorAll('.company-btn').forEach(btn => {
        const name = CATEGORY_NAMES[parseInt(btn.dataset.idx, 10)];
        btn.addEventListener('click', () => selectCategory(name));
      });
    }

    function selectCategory(name) {
      const idx = CATEGORY_NAMES.indexOf(name);
      const info = CATEGORY_DATA[name];
      if (idx < 0 || !info) return;
      appState.selected = name;
      appState.headers = info.headers;
      appState.data = info.data;
      listEl.querySelectorAll('.company-btn').forEach(b => b.classList.remove('active'));
      const btn = listEl.querySelector('.company-btn[data-idx="' + idx + '"]');
      if (btn) btn.classList.add('active');
      titleEl.textContent = name;
      filtersBar.style.display = 'flex';
      renderTableWithFilters();
    }

    // Table

    function renderTableWithFilters() {
      if (!appState.data || !appState.headers) return;
      const filtered = applyFilters(appState.data);
      const total = appState.data.length;
      if (filtered.length === total) {
        subEl.textContent = total + ' problems (All time)';
      } else {
        subEl.textContent = filtered.length + ' of ' + total + ' problems';
      }
      renderTable(appState.headers, filtered);
    }

    function formatAcceptanceRate(value) {
      const n = parseNumber(value);
      return n == null ? '\\u2014' : (n * 100).toFixed(1) + '%';
    }

    function anchor(href, text, cls) {
      const classAttr = cls ? ' class="' + cls + '"' : '';
      return '<a href="' + escapeHtml(href) + '" target="_blank" rel="noopener"' + classAttr + '>' + escapeHtml(text) + '</a>';
    }

    function formatCell(header, row) {
      const value = row[header] == null ? '' : String(row[header]);
      const link = row.Link || '';
      if (header === 'Difficulty') {
        const c = value.trim().toLowerCase();
        const cls = c === 'easy' || c === 'medium' ? c : 'hard';
        return '<span class="diff ' + cls + '">' + escapeHtml(value) + '</span>';
      }
      if (header === 'Title') return link ? anchor(link, value, 'title') : escapeHtml(value);
      if (header === 'Acceptance Rate') return '<span class="accept">' + escapeHtml(formatAcceptanceRate(value)) + '</span>';
      if (header === 'Frequency') return '<span class="freq">' + escapeHtml(value) + '</span>';
      if (header === 'Topics') return '<span class="topics">' + escapeHtml(value) + '</span>';
      if (header === 'Link') return value ? anchor(value, 'Open') : '\\u2014';
      return escapeHtml(value);
    }

    function renderTable(headers, data) {
      if (!data.length) {
        tableContainer.innerHTML = '<div class="empty-state"><p>No problems in this list.</p></div>';
        return;
      }
      const completed = getCompletedSet();
      let html = '<table class="data-table"><thead><tr><th class="col-done">Done</th>';
      headers.forEach(h => { html += '<th>' + escapeHtml(h) + '</th>'; });
      html += '</tr></thead><tbody>';
      data.forEach(row => {
        const link = row.Link || '';
        const isDone = link !== '' && completed.has(link);
        html += '<tr class="' + (isDone ? 'row-done' : '') + '" data-link="' + escapeHtml(link) + '">';
        html += '<td class="col-done"><input type="checkbox" class="done-cb"' + (isDone ? ' checked' : '') +
          ' data-link="' + escapeHtml(link) + '" aria-label="Mark complete"></td>';
        headers.forEach(h => { html += '<td>' + formatCell(h, row) + '</td>'; });
        html += '</tr>';
      });
      html += '</tbody></table>';
      tableContainer.innerHTML = html;
      tableContainer.querySelectorAll('.done-cb').forEach(cb => {
        cb.addEventListener('change', function () {
          const link = this.dataset.link;
          if (!link) return;
          setCompleted(link, this.checked);
          const row = this.closest('tr');
          if (row) row.classList.toggle('row-done', this.checked);
        });
      });
    }

    ['filter-easy', 'filter-medium', 'filter-hard'].forEach(id => {
      document.getElementById(id).addEventListener('change', renderTableWithFilters);
    });
    ['filter-freq-min', 'filter-freq-max', 'filter-accept-min', 'filter-accept-max'].forEach(id => {
      const el = document.getElementById(id);
      el.addEventListener('change', renderTableWithFilters);
      el.addEventListener('input', renderTableWithFilters);
    });

    searchEl.addEventListener('input', () => renderCompanyList(searchEl.value.trim()));
    renderCompanyList('');
    if (CATEGORY_NAMES.length) {
      selectCategory(CATEGORY_NAMES[0]);
    } else {
      tableContainer.innerHTML = '<div class="empty-state"><p>No company datasets found.</p></div>';
    }
"""


def script_json(data) -> str:
    """JSON that is safe to place inside an inline <script> element."""
    text = json.dumps(data, ensure_ascii=False)
    return text.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def render_report(categories: Dict[str, Category], config: Optional[DashboardConfig] = None) -> str:
    """Build the dashboard document.

    Args:
        categories: Categories in sidebar order, aggregate included
        config: Title, labels and storage keys

    Returns:
        The complete HTML document
    """
    config = config or DashboardConfig()
    title = escape(config.title)

    payload = {name: category.to_payload() for name, category in categories.items()}
    storage_keys = {
        "theme": config.theme_key,
        "sidebar": config.sidebar_key,
        "completed": config.completed_key,
    }

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{title}</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="{escape(FONTS_URL)}" rel="stylesheet">
  <style>{REPORT_STYLE}  </style>
</head>
<body>
  <div class="layout">
    <aside class="sidebar">
      <h2>{escape(config.sidebar_heading)}</h2>
      <div class="search-wrap">
        <input type="text" class="search" id="search" placeholder="Search company..." autocomplete="off">
      </div>
      <div id="company-list"></div>
    </aside>
    <main class="main">
      <div class="header-row">
        <div class="header-left">
          <button type="button" class="sidebar-toggle" id="sidebar-toggle" aria-label="Toggle sidebar" aria-expanded="true">
            <span>&#9776;</span>
          </button>
          <h1 id="company-title">Select a company</h1>
        </div>
        <button type="button" class="theme-toggle" id="theme-toggle" aria-label="Toggle theme">
          <svg id="theme-icon-dark" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2"><path d="M12 3a6 6 0 0 0 6 6c0 2.4-.9 4.6-2.4 6.2A9 9 0 0 1 12 21a9 9 0 0 1-5.6-2.1C4.9 13.6 4 11.4 4 9a6 6 0 0 0 6-6z"/></svg>
          <svg id="theme-icon-light" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" style="display:none"><circle cx="12" cy="12" r="4"/><path d="M12 2v2M12 20v2M4.93 4.93l1.41 1.41M17.66 17.66l1.41 1.41M2 12h2M20 12h2M6.34 17.66l-1.41 1.41M19.07 4.93l-1.41 1.41"/></svg>
          <span id="theme-label">Light</span>
        </button>
      </div>
      <p class="sub" id="company-sub"></p>
      <div class="filters" id="filters-bar" style="display:none">
        <div class="filter-diff">
          <label>Difficulty:</label>
          <span><input type="checkbox" id="filter-easy" checked> <label for="filter-easy">Easy</label></span>
          <span><input type="checkbox" id="filter-medium" checked> <label for="filter-medium">Medium</label></span>
          <span><input type="checkbox" id="filter-hard" checked> <label for="filter-hard">Hard</label></span>
        </div>
        <div class="filter-freq">
          <label for="filter-freq-min">Min frequency:</label>
          <input type="number" id="filter-freq-min" min="0" max="100" step="0.1" placeholder="0">
          <label for="filter-freq-max">Max:</label>
          <input type="number" id="filter-freq-max" min="0" max="100" step="0.1" placeholder="100">
        </div>
        <div class="filter-accept">
          <label for="filter-accept-min">Acceptance %:</label>
          <input type="number" id="filter-accept-min" min="0" max="100" step="0.1" placeholder="0">
          <span>&ndash;</span>
          <input type="number" id="filter-accept-max" min="0" max="100" step="0.1" placeholder="100">
        </div>
      </div>
      <div class="table-wrap">
        <div id="table-container"></div>
      </div>
    </main>
  </div>
  <script>
    const CATEGORY_DATA = {script_json(payload)};
    const CATEGORY_NAMES = {script_json(list(categories))};
    const STORAGE_KEYS = {script_json(storage_keys)};
{REPORT_SCRIPT}  </script>
</body>
</html>
"""


def write_report(html: str, output_path: Path) -> None:
    """Write the document, replacing any previous report."""
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html)


def export_report(
    categories: Dict[str, Category],
    output_path: Path,
    config: Optional[DashboardConfig] = None,
) -> int:
    """Aggregate, render and write the dashboard.

    Args:
        categories: Company datasets keyed by name
        output_path: Path to write the HTML file
        config: Title, labels and storage keys

    Returns:
        Number of categories in the report, aggregate included
    """
    config = config or DashboardConfig()
    ordered = with_aggregate(categories, config.all_label)
    write_report(render_report(ordered, config), output_path)

    console.print(f"[green]Written {output_path}[/green]")
    return len(ordered)
