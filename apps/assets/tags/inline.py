# apps/assets/tags/inline.py
"""
Snippets JS inline du protocole legacy (@vitejs/plugin-legacy) et du préambule React.
Contenus émis tels quels dans les balises <script>.
"""
from __future__ import annotations

LEGACY_POLYFILL_ID = "vite-legacy-polyfill"
LEGACY_ENTRY_CLASS = "vite-legacy-entry"

DETECT_MODERN_BROWSER_CODE = (
    'import.meta.url;import("_").catch(()=>1);(async function*(){})().next();'
    'if(location.protocol!="file:"){window.__vite_is_modern_browser=true}'
)

DYNAMIC_FALLBACK_CODE = (
    "!function(){if(window.__vite_is_modern_browser)return;"
    'console.warn("vite: loading legacy chunks, syntax error above and the same error below should be ignored");'
    f'var e=document.getElementById("{LEGACY_POLYFILL_ID}"),n=document.createElement("script");'
    f'n.src=e.src,n.onload=function(){{document.querySelectorAll("script.{LEGACY_ENTRY_CLASS}")'
    '.forEach(function(e){System.import(e.getAttribute("data-src"))})},'
    "document.body.appendChild(n)}();"
)

# Safari 10.1 exécute à la fois module et nomodule
SAFARI_NO_MODULE_FIX_CODE = (
    '!function(){var e=document,t=e.createElement("script");'
    'if(!("noModule"in t)&&"onbeforeload"in t){var n=!1;'
    'e.addEventListener("beforeload",(function(e){if(e.target===t)n=!0;'
    'else if(!e.target.hasAttribute("nomodule")||!n)return;e.preventDefault()}),!0),'
    't.type="module",t.src=".",e.head.appendChild(t),t.remove()}}();'
)


def system_js_inline_code(element_id: str) -> str:
    return f"System.import(document.getElementById('{element_id}').getAttribute('data-src'))"


def react_refresh_preamble(dev_server_url: str) -> str:
    return (
        f'import RefreshRuntime from "{dev_server_url}@react-refresh"\n'
        "RefreshRuntime.injectIntoGlobalHook(window)\n"
        "window.$RefreshReg$ = () => {}\n"
        "window.$RefreshSig$ = () => (type) => type\n"
        "window.__vite_plugin_react_preamble_installed__ = true"
    )
