"""Renders resolution results as human-readable text.

Rendering is delegated to Jinja2. The default template can be replaced by passing a
different one to :func:`render_report`; templates are rendered with the result, the
name of the target, and the ``include_schema`` flag as variables, and have the
``pretty_json`` filter available.

"""

from typing import Any
import json

import jinja2

from .types import ResolveResult

DEFAULT_TEMPLATE = """\
Schema: {{ target }}
{% if result.success %}
Status: resolved
Dependencies ({{ result.total_dependencies }}): {{ result.dependencies | join(", ") }}
{% if result.has_circular_references %}
Circular references:
{% for cycle in result.circular_references %}
  - {{ cycle }}
{% endfor %}
{% else %}
Circular references: none
{% endif %}
{% if include_schema %}

{{ result.schema | pretty_json }}
{% endif %}
{% else %}
Status: failed
Error: {{ result.error }}
{% endif %}
"""


def pretty_json(value: Any) -> str:
    """Format a schema as indented JSON. Values JSON cannot encode are stringified."""
    return json.dumps(value, indent=2, default=str)


def _make_environment() -> jinja2.Environment:
    environment = jinja2.Environment(trim_blocks=True, lstrip_blocks=True)

    # make undefined references raise an error
    environment.undefined = jinja2.StrictUndefined

    environment.filters["pretty_json"] = pretty_json
    return environment


def render_report(
    result: ResolveResult,
    target: str,
    include_schema: bool = False,
    template: str = DEFAULT_TEMPLATE,
) -> str:
    """Render a summary of a resolution result.

    Parameters
    ----------
    result : ResolveResult
        The result to summarize.
    target : str
        The schema name or pointer that was resolved.
    include_schema : bool
        Whether to append the expanded schema, formatted as JSON. Default: False.
    template : str
        The Jinja2 template to render. Default: :data:`DEFAULT_TEMPLATE`.

    Returns
    -------
    str
        The rendered report, without a trailing newline.

    Raises
    ------
    jinja2.exceptions.UndefinedError
        If the template refers to an undefined variable.

    """
    rendered = (
        _make_environment()
        .from_string(template)
        .render(result=result, target=target, include_schema=include_schema)
    )
    return rendered.rstrip("\n")
