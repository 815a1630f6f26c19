"""
Step factories — the vocabulary recipe segments are written in.

Each helper returns one unbound ``Step`` (no id yet; the execution
plan assigns it). The Rails-flavoured helpers (``rails``, ``generate``,
``environment``, ``route``) mirror what the equivalent Rails template
calls do, expressed as plain shell and text steps.
"""

from __future__ import annotations

import textwrap

from railseed.core.data import anchors
from railseed.core.models.step import Step
from railseed.core.models.target import GeneratedFile

# ── Processes ───────────────────────────────────────────────────


def run(command: str, label: str = "", policy: str = "best-effort") -> Step:
    """A shell command run in the project directory."""
    return Step(
        label=label,
        kind="run-process",
        adapter="shell",
        params={"command": command, "policy": policy},
    )


def rails(args: str, label: str = "", policy: str = "best-effort") -> Step:
    """``bin/rails <args>``."""
    return run(f"bin/rails {args}", label=label, policy=policy)


def generate(*args: str, label: str = "") -> Step:
    """``bin/rails generate <args...>``."""
    return rails("generate " + " ".join(args), label=label)


def git(operation: str, label: str = "", **params) -> Step:
    """A git operation (init, add, commit, branch)."""
    return Step(
        label=label or f"git {operation}",
        kind="run-process",
        adapter="git",
        params={"operation": operation, **params},
    )


# ── Files ───────────────────────────────────────────────────────


def create_file(path: str, content: str, overwrite: bool = False, label: str = "") -> Step:
    return Step(
        label=label,
        kind="materialize-file",
        adapter="filesystem",
        params={"operation": "create", "path": path, "content": content, "overwrite": overwrite},
    )


def materialize(generated: GeneratedFile) -> Step:
    """Create the file a generator produced."""
    return create_file(
        generated.path,
        generated.content,
        overwrite=generated.overwrite,
        label=generated.reason,
    )


def remove_file(path: str) -> Step:
    return Step(
        label=f"remove {path}",
        kind="materialize-file",
        adapter="filesystem",
        params={"operation": "remove", "path": path},
    )


def ensure_directory(path: str) -> Step:
    return Step(
        label=f"mkdir {path}",
        kind="materialize-file",
        adapter="filesystem",
        params={"operation": "mkdir", "path": path},
    )


# ── Text edits ──────────────────────────────────────────────────


def _text(path: str, operation: str, label: str, **fields) -> Step:
    return Step(
        label=label,
        kind="mutate-file",
        adapter="text",
        params={"path": path, "operation": operation, **fields},
    )


def replace_exact(path: str, before: str, after: str, label: str = "") -> Step:
    return _text(path, "replace_exact", label, before=before, after=after)


def replace_whole(path: str, content: str, create_missing: bool = False, label: str = "") -> Step:
    return _text(path, "replace_whole", label, content=content, create_missing=create_missing)


def insert_anchored(
    path: str,
    anchor: str,
    content: str,
    position: str = "after",
    label: str = "",
) -> Step:
    return _text(path, "insert_anchored", label, anchor=anchor, content=content, position=position)


def append_if_absent(path: str, block: str, label: str = "") -> Step:
    return _text(path, "append_if_absent", label, content=block)


# ── Rails config helpers ────────────────────────────────────────


def _reindent(code: str, spaces: int) -> str:
    """Strip common indentation, indent by *spaces*, end with a newline."""
    body = textwrap.indent(textwrap.dedent(code).strip("\n"), " " * spaces)
    return body + "\n"


def environment(code: str, env: str | None = None, label: str = "") -> Step:
    """Add *code* to the application config, or to one environment's config."""
    if env is None:
        return insert_anchored(
            "config/application.rb",
            anchors.APPLICATION_CLASS,
            _reindent(code, 4),
            label=label or "config/application.rb",
        )
    path = f"config/environments/{env}.rb"
    return insert_anchored(
        path,
        anchors.ENVIRONMENT_CONFIGURE,
        _reindent(code, 2),
        label=label or path,
    )


def route(code: str, label: str = "") -> Step:
    """Add a routing line at the top of the routes block."""
    return insert_anchored(
        "config/routes.rb",
        anchors.ROUTES_DRAW,
        _reindent(code, 2),
        label=label or f"route {code.strip()}",
    )


# ── Branch records ──────────────────────────────────────────────


def probe_decision(question: str, answer: bool, branch: str) -> Step:
    """Record which branch a probe selected."""
    return Step(
        label=f"probe: {question}",
        kind="probe-and-branch",
        adapter="probe",
        params={"question": question, "answer": answer, "branch": branch},
    )
