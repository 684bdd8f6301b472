"""Render context and Jinja rendering for issue templates."""

import json
import os
import time
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

import arrow
import jinja2

from issuesync.models import FrontMatter, RenderedIssue, RepoRef
from issuesync.parsing import FrontMatterError

# GitHub Actions context variables exposed at the top level of the render context.
_HOST_CONTEXT_VARS = {
    "event_name": "GITHUB_EVENT_NAME",
    "sha": "GITHUB_SHA",
    "ref": "GITHUB_REF",
    "workflow": "GITHUB_WORKFLOW",
    "action": "GITHUB_ACTION",
    "actor": "GITHUB_ACTOR",
}


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def date_filter(value: Any, fmt: str | None = None) -> str:
    """Format a timestamp with moment-style tokens: {{ date | date('YYYY-MM-DD') }}.

    Numbers are epoch milliseconds, matching the ``date`` context variable.
    Without a pattern the ISO-8601 form is returned. An undefined value
    formats the current time.
    """
    try:
        if isinstance(value, jinja2.Undefined):
            moment = arrow.utcnow()
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            moment = arrow.get(value / 1000)
        elif isinstance(value, (datetime, date, str)):
            moment = arrow.get(value)
        else:
            raise TypeError(f"unsupported type {type(value).__name__}")
    except (TypeError, ValueError) as exc:
        raise jinja2.TemplateRuntimeError(f"date filter cannot parse {value!r}: {exc}") from exc
    return moment.format(fmt) if fmt else moment.isoformat()


def make_environment() -> jinja2.Environment:
    # Issue bodies are markdown, never HTML — no escaping.
    env = jinja2.Environment(
        autoescape=False,
        undefined=jinja2.ChainableUndefined,
        keep_trailing_newline=True,
    )
    env.filters["date"] = date_filter
    return env


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


def _load_event_payload(event_path: str | None) -> dict:
    if not event_path or not Path(event_path).is_file():
        return {}
    return json.loads(Path(event_path).read_text(encoding="utf-8"))


def build_render_context(
    repo: RepoRef,
    environ: Mapping[str, str] | None = None,
    now_ms: int | None = None,
) -> dict[str, Any]:
    """Build the variables shared by every template rendered in one run."""
    env_vars = dict(os.environ if environ is None else environ)
    context: dict[str, Any] = {name: env_vars.get(var) for name, var in _HOST_CONTEXT_VARS.items()}
    context.update(
        payload=_load_event_payload(env_vars.get("GITHUB_EVENT_PATH")),
        repo={"owner": repo.owner, "repo": repo.repo},
        env=env_vars,
        date=now_ms if now_ms is not None else int(time.time() * 1000),
    )
    return context


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_string(env: jinja2.Environment, template: str, context: Mapping[str, Any]) -> str:
    return env.from_string(template).render(context)


def _render_list(env: jinja2.Environment, value: Any, context: Mapping[str, Any]) -> list[str]:
    """Accept a YAML list or a comma-separated string: "bug, docs" -> ["bug", "docs"]."""
    if value is None:
        return []
    items = value if isinstance(value, list) else str(value).split(",")
    rendered = (render_string(env, str(item), context).strip() for item in items)
    return [item for item in rendered if item]


def _milestone(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def render_issue(env: jinja2.Environment, front_matter: FrontMatter, context: Mapping[str, Any]) -> RenderedIssue:
    attributes = front_matter.attributes
    title_template = attributes.get("title")
    if title_template is None or not str(title_template).strip():
        raise FrontMatterError("Front matter is missing a 'title' attribute")

    title = render_string(env, str(title_template), context)
    if not title.strip():
        raise FrontMatterError(f"Title template {title_template!r} rendered to an empty string")

    return RenderedIssue(
        title=title,
        body=render_string(env, front_matter.body, context),
        assignees=_render_list(env, attributes.get("assignees"), context),
        labels=_render_list(env, attributes.get("labels"), context),
        milestone=_milestone(attributes.get("milestone")),
    )
