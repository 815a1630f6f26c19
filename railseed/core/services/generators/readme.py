"""
README generator — a project README titled with the derived display title.
"""

from __future__ import annotations

from railseed.core.models.identity import DerivedIdentity
from railseed.core.models.target import GeneratedFile

_BODY = """\
A Rails 7 application bootstrapped with a modern stack: authentication, authorization, background jobs, auditing, and frontend tooling.

---

## 🚀 How this project was created

```bash
rails new {repo_name} -d postgresql --css tailwind
railseed run {repo_name}
```

`railseed run --dry-run` lists every step without touching the project.

---

## ✨ What's included

- **Authentication & Accounts**
  - Devise (`User` model)
  - Tailwind-styled Devise views
  - Simple Form with Tailwind wrappers
  - Flash messages (notice/alert)

- **Authorization & Policies**
  - Pundit
  - Default `before_action :authenticate_user!`

- **Background Jobs**
  - Sidekiq + Redis integration
  - Web UI mounted at `/sidekiq` (requires login)

- **Audit & Logging**
  - PaperTrail for record versioning
  - Lograge for structured logging

- **Security**
  - Rack::Attack for rate limiting

- **Frontend**
  - TailwindCSS (Rails 7 `--css tailwind`)
  - Vite + React + TypeScript setup
  - Example `App.tsx` mounted at `#react-root`

---

## 🛠️ Requirements

- Ruby 3.2+
- Rails 7.1+
- PostgreSQL 14+
- Redis 6+
- Node.js 18+ & Yarn/NPM
- Foreman (`gem install foreman`) for `bin/dev`

---

## 🧪 Getting started

```bash
bundle install
yarn install   # or: npm install
bin/rails db:setup
```

Start dev servers (Rails + Vite):
```bash
bin/dev
```

Visit:
- http://localhost:3000 → Rails app
- http://localhost:3000/sidekiq → Sidekiq dashboard (requires login)

---

## 🔑 Authentication

Devise provides:
- `User` model with email/password
- Registration, login, password recovery
- Root page (`/`) is public, all others require login

Create your first user:

```bash
bin/rails console
User.create!(email: "admin@example.com", password: "password123", password_confirmation: "password123")
```

---

## 📦 Project Structure

```
app/
  controllers/      # Devise, PagesController, ApplicationController
  models/           # User + (extend with Tenant, etc.)
  views/            # Devise views (Tailwind-ready), pages/home
  frontend/         # React components (App.tsx entry)
config/
  initializers/     # Sidekiq, Rack::Attack, etc.
  routes.rb         # Root route + /sidekiq
```

---

## 📚 Development Notes

- **Policies:** Add Pundit policies under `app/policies/`.
- **Multi-tenancy:** Add a `Tenant` model and associate with `User` to enable scoped data.
- **Service objects:** Put business logic in `app/services/`.
- **Background jobs:** Use `Sidekiq::Worker` classes under `app/workers/`.

---

## 🔗 GitHub repo auto-creation (optional)

With the GitHub CLI installed and authenticated, scaffolding creates a **private repo** and pushes the initial commit.

```bash
gh auth login
export HOST_OWNER=your-org-or-username   # optional
```

---

## 📜 License

MIT — use and adapt for your projects.
"""


def generate_readme(identity: DerivedIdentity) -> GeneratedFile:
    """Generate README.md for the scaffolded project.

    Overwrites the README ``rails new`` wrote.
    """
    content = f"# {identity.title}\n\n" + _BODY.format(repo_name=identity.repo_name)
    return GeneratedFile(
        path="README.md",
        content=content,
        overwrite=True,
        reason=f"README for {identity.title}",
    )


def commit_message(identity: DerivedIdentity) -> str:
    """Message for the initial commit of the scaffolded project."""
    return (
        f"Initial commit: {identity.title} (Rails + Tailwind + Vite/React/TS"
        " + Devise + Pundit + Sidekiq + PaperTrail) template"
    )
