"""
``{{name}}`` placeholder templates for survey emails and pages.
"""

import html
import re
from dataclasses import dataclass
from typing import Any, Mapping

PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Template:
    """A template source with ``{{name}}`` placeholders.

    HTML templates escape substituted values; plain ones insert them as is.
    Unknown placeholders and ``None`` values render as empty strings.
    """

    def __init__(self, source: str, html_escape: bool = False):
        self.source = source
        self.html_escape = html_escape

    @property
    def placeholders(self) -> frozenset[str]:
        return frozenset(PLACEHOLDER.findall(self.source))

    def render(self, values: Mapping[str, Any]) -> str:
        def fill(match: re.Match) -> str:
            value = values.get(match.group(1))
            text = "" if value is None else str(value)
            return html.escape(text) if self.html_escape else text

        return PLACEHOLDER.sub(fill, self.source)


def html_template(source: str) -> Template:
    return Template(source, html_escape=True)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str | None


class EmailTemplate:
    """Subject, HTML body and optional plain-text body rendered together."""

    def __init__(self, subject: str, html_body: str, text_body: str | None = None):
        self.subject = Template(subject)
        self.html_body = html_template(html_body)
        self.text_body = Template(text_body) if text_body else None

    @property
    def placeholders(self) -> frozenset[str]:
        names = self.subject.placeholders | self.html_body.placeholders
        if self.text_body is not None:
            names |= self.text_body.placeholders
        return names

    def render(self, values: Mapping[str, Any]) -> RenderedEmail:
        return RenderedEmail(
            subject=self.subject.render(values),
            html=self.html_body.render(values),
            text=self.text_body.render(values) if self.text_body else None,
        )
