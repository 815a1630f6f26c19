"""
Frontend content — the React entrypoint, App component and mount node.
"""

from __future__ import annotations

from railseed.core.models.target import GeneratedFile

ENTRYPOINT_JS = "app/frontend/entrypoints/application.js"
ENTRYPOINT_TSX = "app/frontend/entrypoints/application.tsx"

REACT_ROOT = '<div id="react-root"></div>'
REACT_ROOT_BODY = '<body>\n    ' + REACT_ROOT

NPM_PACKAGES = "react react-dom @types/react @types/react-dom typescript"
TSC_FLAGS = "--jsx react-jsx --esModuleInterop --resolveJsonModule --skipLibCheck"

_ENTRYPOINT = """\
import React from "react";
import { createRoot } from "react-dom/client";
import App from "../App";

document.addEventListener("DOMContentLoaded", () => {
  const el = document.getElementById("react-root");
  if (el) createRoot(el).render(<App />);
});
"""


def entrypoint(path: str = ENTRYPOINT_JS) -> GeneratedFile:
    """Vite entrypoint mounting ``App`` on the ``#react-root`` node."""
    return GeneratedFile(path=path, content=_ENTRYPOINT, reason="React entrypoint")


def app_component() -> GeneratedFile:
    return GeneratedFile(
        path="app/frontend/App.tsx",
        content="""\
import * as React from "react";
export default function App() {
  return <div className="p-6 text-xl font-semibold">Hello from React + Vite + Tailwind</div>;
}
""",
        reason="App.tsx",
    )
