# savepoint/render/agent/js.py
from __future__ import annotations

JS_PART = r'''(function(){
  "use strict";

  // -----------------------------
  // Child-window capture agent
  // -----------------------------
  const GAME_TITLE = __GAME_TITLE_JSON__;
  const NOTE_KEY = __NOTE_KEY_PREFIX_JSON__ + encodeURIComponent(GAME_TITLE);
  const MAX_LINES = __MAX_LINES__;
  const LINE_CHARS = __LINE_CHARS__;
  const LEVELS = ["log", "warn", "error", "info", "debug"];

  const el = document.getElementById("sp-mini");
  const logs = document.getElementById("sp-mini-logs");
  const area = document.getElementById("sp-mini-notes-area");
  const saveBtn = document.getElementById("sp-mini-save-note");
  let collapsed = false;

  function lsGet(key) {
    try { return localStorage.getItem(key); } catch (_) { return null; }
  }
  function lsSet(key, val) {
    try { localStorage.setItem(key, String(val)); } catch (_) {}
  }

  function postToOpener(msg) {
    try {
      if (window.opener) window.opener.postMessage(msg, "*");
    } catch (_) {}
  }

  function flatten(args) {
    return args.map(function(x){
      try { return (typeof x === "object") ? JSON.stringify(x) : String(x); }
      catch (_) { return String(x); }
    }).join(" ");
  }

  function lineClass(lvl) {
    if (lvl === "error") return "e";
    if (lvl === "warn") return "w";
    if (lvl === "info") return "i";
    return "";
  }

  function addLog(lvl, msg) {
    const text = String(msg);
    if (logs) {
      const d = document.createElement("div");
      d.className = ("sp-ml " + lineClass(lvl)).trim();
      d.textContent = new Date().toLocaleTimeString() + " " + text.slice(0, LINE_CHARS);
      logs.appendChild(d);
      while (logs.children.length > MAX_LINES) logs.removeChild(logs.firstChild);
      logs.scrollTop = logs.scrollHeight;
    }
    postToOpener({ type: "sp_log", lvl: lvl, msg: text, gameTitle: GAME_TITLE });
  }

  LEVELS.forEach(function(m){
    const orig = console[m].bind(console);
    console[m] = function(){
      const args = Array.prototype.slice.call(arguments);
      orig.apply(null, args);
      addLog(m, flatten(args));
    };
  });

  window.addEventListener("error", function(e){
    addLog("error", "Uncaught: " + e.message + " (" + e.filename + ":" + e.lineno + ")");
  });
  window.addEventListener("unhandledrejection", function(e){
    addLog("error", "Unhandled promise: " + e.reason);
  });

  function setCollapsed(v) {
    collapsed = !!v;
    if (el) el.classList.toggle("sp-collapsed", collapsed);
    const t = document.getElementById("sp-mini-toggle");
    if (t) t.textContent = collapsed ? "+" : "-";
  }

  const header = document.getElementById("sp-mini-header");
  if (header) header.addEventListener("click", function(e){
    if (e.target.closest("#sp-mini-btns")) return;
    setCollapsed(!collapsed);
  });
  const toggle = document.getElementById("sp-mini-toggle");
  if (toggle) toggle.addEventListener("click", function(e){
    e.stopPropagation();
    setCollapsed(!collapsed);
  });
  const clear = document.getElementById("sp-mini-clear");
  if (clear) clear.addEventListener("click", function(){ if (logs) logs.innerHTML = ""; });

  const notesBtn = document.getElementById("sp-mini-notes-btn");
  if (notesBtn) notesBtn.addEventListener("click", function(){
    const n = document.getElementById("sp-mini-notes");
    if (!n) return;
    n.style.display = (n.style.display === "none") ? "block" : "none";
    if (n.style.display === "block" && area) area.value = lsGet(NOTE_KEY) || "";
  });

  if (saveBtn) saveBtn.addEventListener("click", function(){
    const txt = area ? area.value : "";
    lsSet(NOTE_KEY, txt);
    postToOpener({ type: "sp_note", key: NOTE_KEY, txt: txt, gameTitle: GAME_TITLE });
    saveBtn.textContent = "Saved";
    setTimeout(function(){ saveBtn.textContent = "Save note"; }, 1500);
  });

  const saved = lsGet(NOTE_KEY);
  if (saved && area) area.value = saved;
})();
'''
