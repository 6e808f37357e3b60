# savepoint/render/agent/markup.py
from __future__ import annotations

MARKUP = r'''<div id="sp-mini">
  <div id="sp-mini-header">
    <span id="sp-mini-title">Console</span>
    <div id="sp-mini-btns">
      <button class="sp-mini-btn" id="sp-mini-notes-btn" title="Notes">N</button>
      <button class="sp-mini-btn" id="sp-mini-clear" title="Clear">C</button>
      <button class="sp-mini-btn" id="sp-mini-toggle" title="Collapse">-</button>
    </div>
  </div>
  <div id="sp-mini-logs"></div>
  <div id="sp-mini-notes" style="display:none">
    <textarea placeholder="Notes / progress..." id="sp-mini-notes-area"></textarea>
    <button class="sp-mini-btn" id="sp-mini-save-note" style="margin-top:3px;">Save note</button>
  </div>
</div>
'''
