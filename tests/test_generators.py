"""
Tests for generated content and step factories.
"""

from railseed.core.data.gems import GEMS
from railseed.core.models.identity import DerivedIdentity
from railseed.core.services import steps
from railseed.core.services.generators import frontend, rails_files, readme


class TestRailsFiles:
    def test_gem_block_order(self):
        block = rails_files.gem_block()
        lines = [line for line in block.splitlines() if line]
        assert len(lines) == len(GEMS)
        assert lines[0] == 'gem "devise"'
        assert lines[-1] == 'gem "vite_rails"'
        assert block.endswith("\n\n")

    def test_controllers_are_creates(self):
        assert rails_files.application_controller().overwrite is False
        assert rails_files.pages_controller().path == "app/controllers/pages_controller.rb"


class TestFrontend:
    def test_entrypoint_mounts_react_root(self):
        content = frontend.entrypoint().content
        assert content.count("react-root") == 1
        assert 'import App from "../App";' in content

    def test_entrypoint_path(self):
        assert frontend.entrypoint(frontend.ENTRYPOINT_TSX).path.endswith(".tsx")


class TestReadme:
    def test_titled_and_overwrites(self):
        generated = readme.generate_readme(DerivedIdentity.from_name("my_cool_app"))
        assert generated.path == "README.md"
        assert generated.overwrite is True
        assert generated.content.startswith("# My Cool App\n")
        assert "railseed run my_cool_app" in generated.content

    def test_commit_message(self):
        message = readme.commit_message(DerivedIdentity.from_name("shop"))
        assert message == (
            "Initial commit: Shop (Rails + Tailwind + Vite/React/TS"
            " + Devise + Pundit + Sidekiq + PaperTrail) template"
        )


class TestStepFactories:
    def test_rails_helpers(self):
        step = steps.generate("devise", "User")
        assert step.params["command"] == "bin/rails generate devise User"
        assert step.kind == "run-process"
        assert step.adapter == "shell"

    def test_environment_indents_for_application(self):
        step = steps.environment("config.x = 1\n")
        assert step.params["path"] == "config/application.rb"
        assert step.params["content"] == "    config.x = 1\n"

    def test_environment_for_env_file(self):
        step = steps.environment("config.x = 1", env="production")
        assert step.params["path"] == "config/environments/production.rb"
        assert step.params["content"] == "  config.x = 1\n"

    def test_route(self):
        step = steps.route('root to: "pages#home"')
        assert step.params["content"] == '  root to: "pages#home"\n'
        assert step.kind == "mutate-file"

    def test_critical_policy(self):
        assert steps.rails("db:migrate", policy="critical").params["policy"] == "critical"
