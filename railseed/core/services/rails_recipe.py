"""
Rails recipe — the segments that turn a fresh ``rails new`` app into
the Tailwind + Vite/React/TS + Devise + Pundit + Sidekiq + PaperTrail
starter.

Each public ``segment_*`` function is a segment builder: it takes the
PipelineContext and returns the steps for one coherent piece of the
recipe. ``build_stages()`` arranges them into pipeline stages. Order
matters: later segments edit files earlier segments produce (Pundit
hooks go into the controller the Devise segment rewrote).
"""

from __future__ import annotations

import logging
import shlex

from railseed.core.data import anchors
from railseed.core.engine.pipeline import PipelineContext, Stage, StageName
from railseed.core.models.step import Step
from railseed.core.services import steps
from railseed.core.services.generators import frontend, rails_files, readme

logger = logging.getLogger(__name__)

LAYOUT = "app/views/layouts/application.html.erb"
APPLICATION_CONTROLLER = "app/controllers/application_controller.rb"

_KILL_SPRING = (
    "if uname | grep -q 'Darwin'; then "
    "pgrep spring | xargs kill -9 >/dev/null 2>&1 || true; fi"
)


# ── init ────────────────────────────────────────────────────────


def segment_hygiene(ctx: PipelineContext) -> list[Step]:
    logger.info(
        "Scaffolding %s (%s) in %s",
        ctx.identity.title, ctx.identity.identifier, ctx.config.project_dir,
    )
    return [steps.run(_KILL_SPRING, label="stop stray spring processes")]


# ── configuring ─────────────────────────────────────────────────


def segment_gems(ctx: PipelineContext) -> list[Step]:
    return [
        steps.insert_anchored(
            "Gemfile",
            anchors.GEMFILE_DEV_TEST_GROUP,
            rails_files.gem_block(),
            position="before",
            label="declare gems in Gemfile",
        ),
    ]


def segment_layout(ctx: PipelineContext) -> list[Step]:
    return [
        steps.replace_exact(
            LAYOUT, anchors.LAYOUT_VIEWPORT_META, rails_files.VIEWPORT_META,
            label="layout viewport meta",
        ),
        steps.materialize(rails_files.flashes_partial()),
        steps.insert_anchored(
            LAYOUT, anchors.LAYOUT_BODY_OPEN, rails_files.FLASHES_RENDER,
            label="render flashes in layout",
        ),
    ]


def segment_app_config(ctx: PipelineContext) -> list[Step]:
    return [
        steps.environment(rails_files.GENERATOR_DEFAULTS, label="generator defaults"),
        steps.environment(rails_files.CALLBACK_ACTIONS, label="raise_on_missing_callback_actions"),
    ]


# ── generating ──────────────────────────────────────────────────


def segment_bundle(ctx: PipelineContext) -> list[Step]:
    return [
        steps.run("bundle install", policy="critical"),
        steps.rails("db:drop db:create db:migrate", label="reset database", policy="critical"),
    ]


def segment_simple_form(ctx: PipelineContext) -> list[Step]:
    return [steps.generate("simple_form:install", "--tailwind")]


def segment_pages(ctx: PipelineContext) -> list[Step]:
    return [
        steps.generate("controller", "pages", "home", "--skip-routes", "--no-test-framework"),
        steps.route(rails_files.ROOT_ROUTE),
    ]


def segment_ignore_and_env(ctx: PipelineContext) -> list[Step]:
    return [
        steps.append_if_absent(".gitignore", rails_files.IGNORE_PATTERNS, label="ignore patterns"),
        steps.run("touch .env"),
    ]


def segment_devise(ctx: PipelineContext) -> list[Step]:
    return [
        steps.generate("devise:install"),
        steps.generate("devise", "User"),
        steps.remove_file(APPLICATION_CONTROLLER),
        steps.materialize(rails_files.application_controller()),
        steps.rails("db:migrate", policy="critical"),
        steps.generate("devise:views"),
        steps.remove_file("app/controllers/pages_controller.rb"),
        steps.materialize(rails_files.pages_controller()),
    ]


def segment_mailer_hosts(ctx: PipelineContext) -> list[Step]:
    return [
        steps.environment(code, env=env, label=f"mailer host ({env})")
        for env, code in rails_files.MAILER_HOSTS.items()
    ]


def segment_pundit(ctx: PipelineContext) -> list[Step]:
    return [
        steps.generate("pundit:install"),
        steps.replace_exact(
            APPLICATION_CONTROLLER,
            anchors.CONTROLLER_BASE_CLASS,
            rails_files.PUNDIT_HOOKS,
            label="Pundit hooks in ApplicationController",
        ),
    ]


def segment_paper_trail(ctx: PipelineContext) -> list[Step]:
    return [
        steps.generate("paper_trail:install"),
        steps.rails("db:migrate", policy="critical"),
    ]


def segment_sidekiq(ctx: PipelineContext) -> list[Step]:
    return [
        steps.materialize(rails_files.sidekiq_initializer()),
        steps.append_if_absent(
            "config/routes.rb", rails_files.SIDEKIQ_ROUTES, label="mount Sidekiq web UI",
        ),
    ]


def segment_rack_attack(ctx: PipelineContext) -> list[Step]:
    return [
        steps.materialize(rails_files.rack_attack_initializer()),
        steps.environment(rails_files.RACK_ATTACK_MIDDLEWARE, label="Rack::Attack middleware"),
    ]


def segment_lograge(ctx: PipelineContext) -> list[Step]:
    return [
        steps.append_if_absent(
            "config/environments/production.rb",
            rails_files.LOGRAGE_PRODUCTION,
            label="enable Lograge in production",
        ),
    ]


def segment_vite(ctx: PipelineContext) -> list[Step]:
    return [steps.rails("vite:install")]


# ── integrating ─────────────────────────────────────────────────


def segment_entrypoint(ctx: PipelineContext) -> list[Step]:
    """Rewrite whichever entrypoint vite:install produced, or create one."""
    for path in (frontend.ENTRYPOINT_JS, frontend.ENTRYPOINT_TSX):
        if ctx.probe.exists(path):
            return [
                steps.probe_decision(f"{path} exists", True, f"rewrite {path}"),
                steps.replace_whole(path, frontend.entrypoint(path).content, label=f"rewrite {path}"),
            ]
    return [
        steps.probe_decision("any entrypoint exists", False, f"create {frontend.ENTRYPOINT_JS}"),
        steps.materialize(frontend.entrypoint(frontend.ENTRYPOINT_JS)),
    ]


def segment_react(ctx: PipelineContext) -> list[Step]:
    return [
        steps.run(f"npm i -D {frontend.NPM_PACKAGES}"),
        steps.run(f"npx tsc --init {frontend.TSC_FLAGS}"),
        steps.ensure_directory("app/frontend"),
        steps.materialize(frontend.app_component()),
        steps.replace_exact(
            LAYOUT, anchors.LAYOUT_BODY_OPEN, frontend.REACT_ROOT_BODY,
            label="mount node in layout",
        ),
    ]


# ── finalizing ──────────────────────────────────────────────────


def segment_readme(ctx: PipelineContext) -> list[Step]:
    result = [steps.materialize(readme.generate_readme(ctx.identity))]
    url = ctx.config.rubocop_url
    if url:
        result.append(
            steps.run(f"curl -L {shlex.quote(url)} > .rubocop.yml", label="download .rubocop.yml"),
        )
    return result


def segment_git(ctx: PipelineContext) -> list[Step]:
    return [
        steps.git("init"),
        steps.git("add"),
        steps.git("commit", message=readme.commit_message(ctx.identity)),
        steps.git("branch", name=ctx.config.default_branch),
    ]


def segment_remote(ctx: PipelineContext) -> list[Step]:
    """Create the hosted repository, or explain how to wire one up by hand."""
    config = ctx.config
    cli = config.hosting_cli
    repo = config.repo_name or ctx.identity.repo_name
    owner = config.owner

    if ctx.probe.command_available(cli):
        logger.info("Creating %s repository via `%s`", "private" if config.private else "public", cli)
        slug = f"{owner}/{repo}" if owner else repo
        visibility = "--private" if config.private else "--public"
        command = (
            f"{cli} repo create {shlex.quote(slug)} {visibility} --source=. "
            f"--remote={shlex.quote(config.remote_name)} --push"
        )
        return [
            steps.probe_decision(f"{cli} available", True, "create remote repository"),
            steps.run(command, label="create remote repository"),
        ]

    logger.warning("%s not found; skipping remote repository creation", cli)
    if not ctx.probe.has_remote(config.remote_name):
        prefix = f"{owner}/" if owner else ""
        ctx.hints.extend([
            "Set the remote and push manually:",
            f"  git remote add {config.remote_name} git@github.com:{prefix}{repo}.git",
            f"  git push -u {config.remote_name} {config.default_branch}",
        ])
    return [steps.probe_decision(f"{cli} available", False, "skip remote creation")]


# ── Assembly ────────────────────────────────────────────────────


def build_stages() -> list[Stage]:
    """The full recipe, stage by stage."""
    return [
        Stage(StageName.INIT, [segment_hygiene]),
        Stage(StageName.CONFIGURING, [segment_gems, segment_layout, segment_app_config]),
        Stage(StageName.GENERATING, [
            segment_bundle,
            segment_simple_form,
            segment_pages,
            segment_ignore_and_env,
            segment_devise,
            segment_mailer_hosts,
            segment_pundit,
            segment_paper_trail,
            segment_sidekiq,
            segment_rack_attack,
            segment_lograge,
            segment_vite,
        ]),
        Stage(StageName.INTEGRATING, [segment_entrypoint, segment_react]),
        Stage(StageName.FINALIZING, [segment_readme, segment_git, segment_remote]),
    ]
