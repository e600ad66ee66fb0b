"""
template.py — Remote URL templates.

A template is plain text with mustache-style `{{name}}` tags.  Only the tags
with a supplied value are replaced; anything else stays exactly as written.
"""

from __future__ import annotations

from .errors import TemplateError
from .models import Profile

DEFAULT_URL_TEMPLATE = "git@github.com:{{username}}/{{project}}"

OPEN = "{{"
CLOSE = "}}"


def render(template: str, fields: dict[str, str]) -> str:
    """
    Substitute `{{key}}` tags with values from `fields`.
    Whitespace inside the braces is ignored, e.g. `{{ project }}`.
    Raises TemplateError on an unclosed tag, a stray `}}` or a nested `{{`.
    """
    out: list[str] = []
    pos = 0
    while True:
        start = template.find(OPEN, pos)
        stray = template.find(CLOSE, pos)
        if start == -1:
            if stray != -1:
                raise TemplateError(f"unexpected '}}}}' at offset {stray} in template {template!r}")
            out.append(template[pos:])
            break
        if stray != -1 and stray < start:
            raise TemplateError(f"unexpected '}}}}' at offset {stray} in template {template!r}")

        end = template.find(CLOSE, start + len(OPEN))
        if end == -1:
            raise TemplateError(f"unclosed tag at offset {start} in template {template!r}")
        inner = template[start + len(OPEN):end]
        if OPEN in inner:
            raise TemplateError(f"nested tag at offset {start} in template {template!r}")

        out.append(template[pos:start])
        key = inner.strip()
        if key in fields:
            out.append(fields[key])
        else:
            out.append(template[start:end + len(CLOSE)])
        pos = end + len(CLOSE)

    return "".join(out)


def render_url(profile: Profile, project: str, default_template: str = DEFAULT_URL_TEMPLATE) -> str:
    template = profile.url if profile.url is not None else default_template
    return render(template, profile.render_fields(project))
