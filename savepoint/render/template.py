# savepoint/render/template.py
from __future__ import annotations

from .agent.css import CSS_PART
from .agent.js import JS_PART
from .agent.markup import MARKUP

AGENT_SHELL = r"""
<style>
__CSS_BLOCK__</style>
__BODY_MARKUP__<script>
__JS_BLOCK__</script>
"""

# Assemble the agent template (title and limits are injected later by build_agent_html)
AGENT_TEMPLATE = (
    AGENT_SHELL
    .replace("__CSS_BLOCK__", CSS_PART)
    .replace("__JS_BLOCK__", JS_PART)
    .replace("__BODY_MARKUP__", MARKUP)
)
