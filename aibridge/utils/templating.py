# aibridge/utils/templating.py
from __future__ import annotations
from typing import Any, Mapping, Set

from jinja2 import BaseLoader, Environment, StrictUndefined, Template, meta, nodes

# Placeholders are written as {name}; blocks and comments keep their Jinja form.
_env = Environment(
    loader=BaseLoader(),
    undefined=StrictUndefined,
    variable_start_string="{",
    variable_end_string="}",
    keep_trailing_newline=True,
    autoescape=False,
)
# Jinja rewrites line endings to newline_sequence; keep the template's own.
_env_crlf = _env.overlay(newline_sequence="\r\n")
_env_cr = _env.overlay(newline_sequence="\r")


def _env_for(template: str) -> Environment:
    if "\r\n" in template:
        return _env_crlf
    if "\r" in template:
        return _env_cr
    return _env


def compile_template(template: str) -> Template:
    return _env_for(template).from_string(template)


def template_variables(template: str) -> Set[str]:
    return set(meta.find_undeclared_variables(_env.parse(template)))


def literal_placeholders(template: str) -> Set[str]:
    """
    Placeholders Jinja reads as constants instead of names: {true}, {False},
    {none} and friends. They never reach the variable mapping.
    """
    found: Set[str] = set()
    for output in _env.parse(template).find_all(nodes.Output):
        for child in output.nodes:
            if isinstance(child, nodes.Const) and (child.value is None or isinstance(child.value, bool)):
                found.add(str(child.value))
    return found


def render_template(template: str, data: Mapping[str, Any]) -> str:
    return compile_template(template).render(dict(data))
