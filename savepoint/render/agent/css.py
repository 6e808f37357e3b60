# savepoint/render/agent/css.py
from __future__ import annotations

CSS_PART = r'''  #sp-mini{position:fixed;bottom:10px;left:10px;z-index:99999;width:320px;max-height:260px;
    display:flex;flex-direction:column;
    background:rgba(4,10,28,.95);border:1px solid rgba(103,209,255,.3);border-radius:14px;
    font-family:'Courier New',monospace;font-size:.72rem;color:#c5d5ff;box-shadow:0 12px 36px rgba(0,0,0,.7);
    backdrop-filter:blur(12px);overflow:hidden;transition:opacity .2s;}
  #sp-mini.sp-collapsed{max-height:36px;}
  #sp-mini-header{display:flex;align-items:center;justify-content:space-between;
    padding:6px 10px;background:rgba(103,209,255,.08);border-bottom:1px solid rgba(255,255,255,.08);
    cursor:pointer;flex-shrink:0;}
  #sp-mini-title{font-weight:700;color:#67d1ff;font-family:system-ui,sans-serif;}
  #sp-mini-btns{display:flex;gap:4px;}
  .sp-mini-btn{padding:2px 7px;border-radius:6px;border:1px solid rgba(255,255,255,.15);
    background:rgba(255,255,255,.07);color:#e7f0ff;cursor:pointer;font-size:.7rem;}
  .sp-mini-btn:hover{background:rgba(255,255,255,.15);}
  #sp-mini-logs{overflow-y:auto;flex:1;padding:6px 8px;}
  .sp-ml{padding:2px 0 2px 5px;border-left:2px solid rgba(255,255,255,.15);margin-bottom:2px;word-break:break-all;}
  .sp-ml.e{border-color:#ff6e7a;color:#ffaaaf;}
  .sp-ml.w{border-color:#ffd76e;color:#ffe9a0;}
  .sp-ml.i{border-color:#67d1ff;color:#a8e8ff;}
  #sp-mini-notes{padding:6px;border-top:1px solid rgba(255,255,255,.08);}
  #sp-mini-notes textarea{width:100%;background:rgba(255,255,255,.06);border:1px solid rgba(255,255,255,.12);
    border-radius:8px;color:#e7f0ff;font-family:'Courier New',monospace;font-size:.72rem;
    padding:5px;resize:none;outline:none;height:50px;}
'''
