# savepoint/render/blanker.py
from __future__ import annotations

import html as _html

BLANKER_SHELL = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>__TITLE__</title>
<style>
  html,body{margin:0;height:100%;background:#000;overflow:hidden;}
  iframe{border:0;width:100%;height:100%;display:block;}
</style>
</head>
<body>
<iframe src="__SRC__" allow="fullscreen; autoplay; gamepad" allowfullscreen></iframe>
__AUTO_FS__</body>
</html>
"""

_AUTO_FS = r"""<script>
document.addEventListener("click", function once(){
  try { document.documentElement.requestFullscreen(); } catch (_) {}
  document.removeEventListener("click", once);
});
</script>
"""


def make_blanker_html(title: str, src: str, auto_fs: bool = False) -> str:
    """Reference child-window document: the game source in a full-window iframe."""
    return (
        BLANKER_SHELL
        .replace("__AUTO_FS__", _AUTO_FS if auto_fs else "")
        .replace("__SRC__", _html.escape(str(src), quote=True))
        .replace("__TITLE__", _html.escape(str(title), quote=False))
    )
