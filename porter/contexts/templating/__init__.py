"""
Templating Context

Responsibilities:
- Resolves template text through the scoped, shared and built-in tiers
- Interprets the proposal tag language ({{#if}}, {{#each}}, helpers, paths)
- Formats values for display (currency, dates, counts, URI components)

Owns: Template lookup and caching, tag grammar, scope resolution, display helpers
Never: Repairs or enriches trip data (see intake context)
"""

from porter.contexts.templating.defaults import DEFAULT_TEMPLATE, DEFAULT_TEMPLATE_NAME
from porter.contexts.templating.engine import TemplateEngine, render_template
from porter.contexts.templating.exceptions import TemplateNotFound
from porter.contexts.templating.registries import (
    DirectoryTemplateStore,
    InMemoryTemplateStore,
    TemplateListing,
    TemplateRegistry,
    resolve_template_name,
    select_template_name,
)

__all__ = [
    # Interpretation
    "TemplateEngine",
    "render_template",
    # Resolution
    "TemplateRegistry",
    "TemplateListing",
    "InMemoryTemplateStore",
    "DirectoryTemplateStore",
    "resolve_template_name",
    "select_template_name",
    "DEFAULT_TEMPLATE",
    "DEFAULT_TEMPLATE_NAME",
    # Errors
    "TemplateNotFound",
]
