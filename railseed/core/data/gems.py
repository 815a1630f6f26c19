"""
Gem catalog — the gems declared in the Gemfile before bundling.

Each entry is ``(name, extra)`` where ``extra`` is the rest of the
``gem`` line after the name (version constraint or source), or "".
Order is the order they appear in the Gemfile.
"""

from __future__ import annotations

GEMS: list[tuple[str, str]] = [
    ("devise", ""),
    ("simple_form", 'github: "heartcombo/simple_form"'),
    ("dotenv-rails", ""),
    ("pundit", ""),
    ("paper_trail", ""),
    ("sidekiq", ""),
    ("redis", ""),
    ("ruby-openai", '"~> 5.2"'),
    ("aasm", ""),
    ("acts_as_tenant", ""),
    ("rack-attack", ""),
    ("oj", ""),
    ("mini_racer", ""),
    ("json_schemer", ""),
    ("lograge", ""),
    ("vite_rails", ""),
]
