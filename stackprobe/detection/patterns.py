"""Static detection tables.

Every table maps a token to the evidence that identifies it. Insertion
order is significant wherever a table is used first-match-wins (test
frameworks, licenses, CI systems, registries); elsewhere every matching
entry is emitted.
"""

import re

# ---------------------------------------------------------------------------
# JavaScript / TypeScript (package.json dependency names)
# ---------------------------------------------------------------------------

JS_FRAMEWORK_PATTERNS: dict[str, list[str]] = {
    "nextjs": ["next"],
    "react": ["react", "react-dom"],
    "vue": ["vue"],
    "angular": ["@angular/core"],
    "svelte": ["svelte", "@sveltejs/kit"],
    "solid": ["solid-js"],
    "remix": ["@remix-run/react"],
    "astro": ["astro"],
    "nuxt": ["nuxt"],
    "gatsby": ["gatsby"],
}

JS_TOOL_PATTERNS: dict[str, list[str]] = {
    "typescript": ["typescript"],
    "tailwind": ["tailwindcss"],
    "prisma": ["prisma", "@prisma/client"],
    "drizzle": ["drizzle-orm"],
    "express": ["express"],
    "fastify": ["fastify"],
    "hono": ["hono"],
    "elysia": ["elysia"],
    "trpc": ["@trpc/server"],
    "graphql": ["graphql", "@apollo/server"],
    "jest": ["jest"],
    "vitest": ["vitest"],
    "playwright": ["@playwright/test"],
    "cypress": ["cypress"],
    "eslint": ["eslint"],
    "biome": ["@biomejs/biome"],
    "prettier": ["prettier"],
    "vite": ["vite"],
    "webpack": ["webpack"],
    "turbo": ["turbo"],
}

JS_TYPE_TOOLS = frozenset({"typescript"})

JS_TEST_FRAMEWORKS: dict[str, list[str]] = {
    "vitest": ["vitest"],
    "jest": ["jest"],
    "playwright": ["@playwright/test"],
    "cypress": ["cypress"],
    "mocha": ["mocha"],
    "ava": ["ava"],
    "tap": ["tap"],
}

JS_DATASTORE_PATTERNS: dict[str, list[str]] = {
    "postgresql": ["pg", "postgres", "@neondatabase/serverless"],
    "mysql": ["mysql", "mysql2"],
    "mongodb": ["mongodb", "mongoose"],
    "redis": ["redis", "ioredis", "@upstash/redis"],
    "sqlite": ["sqlite3", "better-sqlite3", "@libsql/client"],
}

# Lock file (lowercased) → package manager used to prefix script commands.
JS_LOCK_FILES: list[tuple[str, str]] = [
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lockb", "bun"),
    ("package-lock.json", "npm"),
]

# ---------------------------------------------------------------------------
# Python (normalised distribution names)
# ---------------------------------------------------------------------------

PYTHON_FRAMEWORK_PATTERNS: dict[str, list[str]] = {
    "fastapi": ["fastapi"],
    "django": ["django"],
    "flask": ["flask"],
    "starlette": ["starlette"],
    "litestar": ["litestar"],
    "aiohttp": ["aiohttp"],
    "tornado": ["tornado"],
}

PYTHON_TOOL_PATTERNS: dict[str, list[str]] = {
    "pydantic": ["pydantic"],
    "sqlalchemy": ["sqlalchemy"],
    "celery": ["celery"],
    "pytest": ["pytest"],
    "ruff": ["ruff"],
    "mypy": ["mypy"],
}

PYTHON_TYPE_TOOLS = frozenset({"mypy"})

PYTHON_TEST_FRAMEWORKS: dict[str, list[str]] = {
    "pytest": ["pytest"],
    "unittest": ["unittest", "unittest2"],
    "nose": ["nose", "nose2"],
}

PYTHON_DATASTORE_PATTERNS: dict[str, list[str]] = {
    "postgresql": ["psycopg2", "psycopg2-binary", "psycopg", "asyncpg", "pg8000"],
    "mysql": ["pymysql", "mysqlclient", "aiomysql", "mysql-connector-python"],
    "mongodb": ["pymongo", "motor", "mongoengine", "beanie"],
    "redis": ["redis", "aioredis"],
    "sqlite": ["aiosqlite"],
}

# An ORM with no SQL driver next to it is assumed to run on its default
# backend. Only applied to Python.
PYTHON_ORM_MARKERS = frozenset({"sqlalchemy"})
PYTHON_SQL_DATASTORES = frozenset({"postgresql", "mysql", "sqlite"})

PYTHON_DEFAULT_TEST_CMD = "pytest"
PYTHON_DEFAULT_LINT_CMD = "ruff check ."

# ---------------------------------------------------------------------------
# Rust (Cargo.toml crate names)
# ---------------------------------------------------------------------------

RUST_FRAMEWORK_PATTERNS: dict[str, list[str]] = {
    "actix": ["actix-web"],
    "axum": ["axum"],
    "rocket": ["rocket"],
    "warp": ["warp"],
    "poem": ["poem"],
}

RUST_TOOL_PATTERNS: dict[str, list[str]] = {
    "tokio": ["tokio"],
    "serde": ["serde"],
    "sqlx": ["sqlx"],
    "diesel": ["diesel"],
}

RUST_DATASTORE_PATTERNS: dict[str, list[str]] = {
    "postgresql": ["postgres", "tokio-postgres", "deadpool-postgres"],
    "mysql": ["mysql", "mysql_async"],
    "mongodb": ["mongodb"],
    "redis": ["redis"],
    "sqlite": ["rusqlite"],
}

RUST_COMMANDS = {
    "build": "cargo build",
    "test": "cargo test",
    "lint": "cargo clippy",
    "dev": "cargo run",
}

# ---------------------------------------------------------------------------
# Go (go.mod module path fragments, matched as substrings)
# ---------------------------------------------------------------------------

GO_FRAMEWORK_PATTERNS: dict[str, list[str]] = {
    "gin": ["gin-gonic/gin"],
    "fiber": ["gofiber/fiber"],
    "echo": ["labstack/echo"],
    "chi": ["go-chi/chi"],
    "gorilla": ["gorilla/mux"],
}

GO_TOOL_PATTERNS: dict[str, list[str]] = {
    "gorm": ["gorm.io/gorm"],
}

GO_DATASTORE_PATTERNS: dict[str, list[str]] = {
    "postgresql": ["lib/pq", "jackc/pgx", "gorm.io/driver/postgres"],
    "mysql": ["go-sql-driver/mysql", "gorm.io/driver/mysql"],
    "mongodb": ["go.mongodb.org/mongo-driver"],
    "redis": ["go-redis/redis", "redis/go-redis"],
    "sqlite": ["mattn/go-sqlite3", "gorm.io/driver/sqlite", "modernc.org/sqlite"],
}

GO_COMMANDS = {
    "build": "go build",
    "test": "go test ./...",
    "lint": "golangci-lint run",
    "dev": "go run .",
}

# ---------------------------------------------------------------------------
# Licenses. An entry matches only when every regex matches.
# ---------------------------------------------------------------------------

LICENSE_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    "mit": [
        re.compile(r"mit license"),
        re.compile(r"permission is hereby granted, free of charge"),
    ],
    "apache-2.0": [re.compile(r"apache license"), re.compile(r"version 2\.0")],
    "gpl-3.0": [re.compile(r"gnu general public license"), re.compile(r"version 3")],
    "lgpl-3.0": [re.compile(r"gnu lesser general public license")],
    "agpl-3.0": [re.compile(r"gnu affero general public license")],
    "bsd-3": [
        re.compile(r"bsd 3-clause"),
        re.compile(r"redistribution and use in source and binary forms"),
    ],
    "mpl-2.0": [re.compile(r"mozilla public license"), re.compile(r"2\.0")],
    "unlicense": [
        re.compile(r"unlicense"),
        re.compile(r"this is free and unencumbered software"),
    ],
}

OPEN_SOURCE_LICENSES = frozenset({
    "mit",
    "apache-2.0",
    "gpl-3.0",
    "lgpl-3.0",
    "agpl-3.0",
    "bsd-2-clause",
    "bsd-3",
    "bsd-3-clause",
    "mpl-2.0",
    "unlicense",
    "cc0-1.0",
    "isc",
})

# ---------------------------------------------------------------------------
# CI systems as (token, lowercased root entry name), checked in order.
# GitHub Actions is special-cased: it needs `.github/workflows`.
# ---------------------------------------------------------------------------

GITHUB_ACTIONS = "github_actions"

CI_MARKERS: list[tuple[str, str]] = [
    ("gitlab_ci", ".gitlab-ci.yml"),
    ("jenkins", "jenkinsfile"),
    ("circleci", ".circleci"),
    ("travis", ".travis.yml"),
    ("azure_devops", "azure-pipelines.yml"),
    ("bitbucket", "bitbucket-pipelines.yml"),
    ("drone", ".drone.yml"),
]

# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

DOCKERFILE_NAMES = ("dockerfile",)

COMPOSE_FILE_NAMES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)

# (registry token, substrings, optional regex). First match wins.
REGISTRY_PATTERNS: list[tuple[str, tuple[str, ...], re.Pattern[str] | None]] = [
    ("ghcr", ("ghcr.io",), None),
    ("dockerhub", ("docker.io",), re.compile(r"image:\s*[a-z0-9]+/[a-z0-9]")),
    ("gcr", ("gcr.io",), None),
    # Must not match "azurecr.io".
    ("ecr", (".ecr.", ".amazonaws.com"), None),
    ("acr", ("azurecr.io",), None),
    ("quay", ("quay.io",), None),
    ("gitlab_registry", ("registry.gitlab.com",), None),
]

# ---------------------------------------------------------------------------
# Governance files, in reporting order.
# ---------------------------------------------------------------------------

FUNDING_FILE = ".github/FUNDING.yml"

GOVERNANCE_FILES: list[str] = [
    ".editorconfig",
    "CONTRIBUTING.md",
    "CODE_OF_CONDUCT.md",
    "SECURITY.md",
    "ROADMAP.md",
    ".gitignore",
    "LICENSE",
    "README.md",
    "ARCHITECTURE.md",
    "CHANGELOG.md",
    FUNDING_FILE,
]

LICENSE_FILE = "LICENSE"
