"""
Rails-side content — gems, controllers, initializers and config snippets.
"""

from __future__ import annotations

from railseed.core.data.gems import GEMS
from railseed.core.models.target import GeneratedFile

# ── Snippets spliced into generated files ───────────────────────

VIEWPORT_META = (
    '<meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">'
)

FLASHES_RENDER = '\n    <%= render "shared/flashes" %>'

GENERATOR_DEFAULTS = """\
config.generators do |generate|
  generate.assets false
  generate.helper false
  generate.test_framework :test_unit, fixture: false
end
"""

CALLBACK_ACTIONS = (
    'config.action_controller.raise_on_missing_callback_actions = false'
    ' if Rails.version >= "7.1.0"\n'
)

RACK_ATTACK_MIDDLEWARE = "config.middleware.use Rack::Attack\n"

IGNORE_PATTERNS = """\
.env*
.DS_Store
*.swp
"""

MAILER_HOSTS = {
    "development": 'config.action_mailer.default_url_options = { host: "http://localhost:3000" }',
    "production": 'config.action_mailer.default_url_options = { host: "http://TODO_PUT_YOUR_DOMAIN_HERE" }',
}

ROOT_ROUTE = 'root to: "pages#home"'

SIDEKIQ_ROUTES = """
require "sidekiq/web"
authenticate :user do
  mount Sidekiq::Web => "/sidekiq"
end
"""

# Appended after the configure block, so it addresses the config object explicitly.
LOGRAGE_PRODUCTION = "\nRails.application.config.lograge.enabled = true\n"

PUNDIT_HOOKS = """\
class ApplicationController < ActionController::Base
  include Pundit::Authorization
  before_action :authenticate_user!

  rescue_from Pundit::NotAuthorizedError, with: :user_not_authorized

  private

  def user_not_authorized
    redirect_to(request.referrer || root_path, alert: "Not authorized.")
  end
"""


def gem_block() -> str:
    """Gemfile lines for every cataloged gem, ready to insert before a group."""
    lines = []
    for name, extra in GEMS:
        line = f'gem "{name}"'
        if extra:
            line += f", {extra}"
        lines.append(line)
    return "\n".join(lines) + "\n\n"


# ── Whole files ─────────────────────────────────────────────────


def flashes_partial() -> GeneratedFile:
    return GeneratedFile(
        path="app/views/shared/_flashes.html.erb",
        content="""\
<% if notice %>
  <div class="m-2 rounded bg-blue-50 px-4 py-3 text-blue-800"><%= notice %></div>
<% end %>
<% if alert %>
  <div class="m-2 rounded bg-yellow-50 px-4 py-3 text-yellow-800"><%= alert %></div>
<% end %>
""",
        reason="flash partial",
    )


def application_controller() -> GeneratedFile:
    """Base controller requiring authentication everywhere by default."""
    return GeneratedFile(
        path="app/controllers/application_controller.rb",
        content="""\
class ApplicationController < ActionController::Base
  before_action :authenticate_user!
end
""",
        reason="authenticated ApplicationController",
    )


def pages_controller() -> GeneratedFile:
    """Static pages controller; ``home`` is public."""
    return GeneratedFile(
        path="app/controllers/pages_controller.rb",
        content="""\
class PagesController < ApplicationController
  skip_before_action :authenticate_user!, only: [:home]
  def home; end
end
""",
        reason="public PagesController#home",
    )


def sidekiq_initializer() -> GeneratedFile:
    return GeneratedFile(
        path="config/initializers/sidekiq.rb",
        content="""\
Sidekiq.configure_server do |config|
  config.redis = { url: ENV.fetch("REDIS_URL", "redis://localhost:6379/0") }
end
Sidekiq.configure_client do |config|
  config.redis = { url: ENV.fetch("REDIS_URL", "redis://localhost:6379/0") }
end
""",
        reason="Sidekiq initializer",
    )


def rack_attack_initializer() -> GeneratedFile:
    return GeneratedFile(
        path="config/initializers/rack_attack.rb",
        content="""\
class Rack::Attack
  throttle("req/ip", limit: 300, period: 5.minutes) { |req| req.ip }
end
""",
        reason="Rack::Attack initializer",
    )
