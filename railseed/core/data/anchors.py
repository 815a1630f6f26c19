"""
Text anchors — the exact substrings recipe edits are positioned against.

Each anchor is only valid against the file as freshly generated by
``rails new -d postgresql --css tailwind`` (or by the generator named
next to it) and not yet edited by hand. If a Rails release changes
that output, the edit fails with a ContentMismatch naming the anchor;
nothing is guessed.
"""

from __future__ import annotations

# ── Gemfile ─────────────────────────────────────────────────────

# Precondition: fresh `rails new` Gemfile; the development/test group
# has not been renamed or merged.
GEMFILE_DEV_TEST_GROUP = "group :development, :test do"

# ── Layout (app/views/layouts/application.html.erb) ─────────────

# Precondition: fresh `rails new` layout with the default viewport tag.
LAYOUT_VIEWPORT_META = '<meta name="viewport" content="width=device-width,initial-scale=1">'

# Precondition: the layout contains a bare `<body>` tag (no attributes).
LAYOUT_BODY_OPEN = "<body>"

# ── config/application.rb ───────────────────────────────────────

# Precondition: fresh `rails new` config/application.rb; the
# application class body follows this line, indented four spaces.
APPLICATION_CLASS = "class Application < Rails::Application\n"

# ── config/environments/*.rb ────────────────────────────────────

# Precondition: fresh environment file opening with this block,
# body indented two spaces.
ENVIRONMENT_CONFIGURE = "Rails.application.configure do\n"

# ── config/routes.rb ────────────────────────────────────────────

# Precondition: fresh routes file opening with this block, body
# indented two spaces.
ROUTES_DRAW = "Rails.application.routes.draw do\n"

# ── app/controllers/application_controller.rb ───────────────────

# Precondition: the controller base class as materialized earlier in
# the generating stage (authentication-first, no Pundit hooks yet).
CONTROLLER_BASE_CLASS = "class ApplicationController < ActionController::Base\n"
