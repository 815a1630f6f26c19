"""
Shared test fixtures: a freshly generated Rails app and test doubles.
"""

from pathlib import Path

import pytest

from railseed.adapters.mock import MockAdapter
from railseed.adapters.probe import ProbeAdapter
from railseed.adapters.registry import AdapterRegistry
from railseed.adapters.shell.filesystem import FilesystemAdapter
from railseed.adapters.shell.text import TextEditAdapter
from railseed.core.services.probe import StateProbe

# Files as `rails new -d postgresql --css tailwind` leaves them, cut down
# to the lines the recipe anchors on.
FRESH_RAILS_FILES = {
    "Gemfile": (
        'source "https://rubygems.org"\n'
        "\n"
        'gem "rails", "~> 7.1.3"\n'
        'gem "pg", "~> 1.1"\n'
        "\n"
        "group :development, :test do\n"
        '  gem "debug", platforms: %i[ mri windows ]\n'
        "end\n"
    ),
    "app/views/layouts/application.html.erb": (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        "    <title>MyCoolApp</title>\n"
        '    <meta name="viewport" content="width=device-width,initial-scale=1">\n'
        "  </head>\n"
        "\n"
        "  <body>\n"
        "    <%= yield %>\n"
        "  </body>\n"
        "</html>\n"
    ),
    "config/application.rb": (
        'require_relative "boot"\n'
        "\n"
        "module MyCoolApp\n"
        "  class Application < Rails::Application\n"
        "    config.load_defaults 7.1\n"
        "  end\n"
        "end\n"
    ),
    "config/environments/development.rb": (
        'require "active_support/core_ext/integer/time"\n'
        "\n"
        "Rails.application.configure do\n"
        "  config.enable_reloading = true\n"
        "end\n"
    ),
    "config/environments/production.rb": (
        'require "active_support/core_ext/integer/time"\n'
        "\n"
        "Rails.application.configure do\n"
        "  config.enable_reloading = false\n"
        "end\n"
    ),
    "config/routes.rb": (
        "Rails.application.routes.draw do\n"
        '  get "up" => "rails/health#show", as: :rails_health_check\n'
        "end\n"
    ),
    "app/controllers/application_controller.rb": (
        "class ApplicationController < ActionController::Base\n"
        "end\n"
    ),
    ".gitignore": "/.bundle\n/log/*\n/tmp/*\n",
    "README.md": "# README\n",
}


class FakeProbe(StateProbe):
    """StateProbe with a fixed environment, PATH and set of git remotes."""

    def __init__(self, root, environ=None, commands=(), remotes=()):
        commands = set(commands)
        super().__init__(
            root,
            environ=environ or {},
            which=lambda name: f"/usr/bin/{name}" if name in commands else None,
        )
        self._remotes = set(remotes)

    def has_remote(self, name: str) -> bool:
        return name in self._remotes


@pytest.fixture
def rails_app(tmp_path: Path) -> Path:
    """A fresh Rails project directory named ``my_cool_app``."""
    root = tmp_path / "my_cool_app"
    for rel, content in FRESH_RAILS_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def shell_mock() -> MockAdapter:
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def git_mock() -> MockAdapter:
    return MockAdapter(adapter_name="git")


@pytest.fixture
def registry(shell_mock: MockAdapter, git_mock: MockAdapter) -> AdapterRegistry:
    """Real file adapters; processes and git recorded by mocks."""
    reg = AdapterRegistry()
    reg.register(shell_mock)
    reg.register(git_mock)
    reg.register(FilesystemAdapter())
    reg.register(TextEditAdapter())
    reg.register(ProbeAdapter())
    return reg


@pytest.fixture
def make_probe():
    """Factory for FakeProbe instances."""
    return FakeProbe
