"""
Template resolution for proposal rendering.

Templates live in an external key-value store. A name resolves through three
tiers, first hit wins:

1. Scoped:   {scope}_templates/{name}   (caller-specific override)
2. Shared:   _templates/{name}          (available to every caller)
3. Built-in: DEFAULT_TEMPLATE           (only for the name "default")

Scopes are raw key prefixes, so a scope of "agent42/" checks
"agent42/_templates/{name}".
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

from porter.contexts.templating.defaults import DEFAULT_TEMPLATE, DEFAULT_TEMPLATE_NAME
from porter.contexts.templating.exceptions import TemplateNotFound
from porter.contexts.templating.logger import _log_debug, log_template_resolved

TEMPLATE_NAMESPACE = "_templates/"
TEMPLATE_SUFFIX = ".html"


class TemplateStore(Protocol):
    """Key-value collaborator that holds template text."""

    def get(self, key: str) -> Optional[str]:
        ...

    def list_keys(self, prefix: str) -> List[str]:
        ...


class InMemoryTemplateStore:
    """
    Template store backed by a plain mapping.

    Examples:
        >>> store = InMemoryTemplateStore({"_templates/default": "<html></html>"})
        >>> store.list_keys("_templates/")
        ['_templates/default']
    """

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self.templates: Dict[str, str] = dict(templates or {})

    def get(self, key: str) -> Optional[str]:
        return self.templates.get(key)

    def put(self, key: str, text: str) -> None:
        self.templates[key] = text

    def list_keys(self, prefix: str) -> List[str]:
        return sorted(key for key in self.templates if key.startswith(prefix))


class DirectoryTemplateStore:
    """
    Template store backed by a directory tree.

    Each key maps to `{root}/{key}.html`, so "_templates/cruise" lives at
    `{root}/_templates/cruise.html` and "agent42/_templates/cruise" at
    `{root}/agent42/_templates/cruise.html`.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{TEMPLATE_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def list_keys(self, prefix: str) -> List[str]:
        if not self.root.is_dir():
            return []
        keys = []
        for path in self.root.rglob(f"*{TEMPLATE_SUFFIX}"):
            key = path.relative_to(self.root).with_suffix("").as_posix()
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)


@dataclass
class TemplateListing:
    """
    Templates visible to one scope.

    Attributes:
        scoped: Names overridden for the scope
        shared: Names available to everyone
        default_template: Name a caller gets when it asks for nothing specific
    """

    scoped: List[str] = field(default_factory=list)
    shared: List[str] = field(default_factory=list)
    default_template: str = DEFAULT_TEMPLATE_NAME


class TemplateRegistry:
    """
    Registry for resolving and caching proposal template text.

    Args:
        store: Key-value collaborator holding template text. Defaults to an
            empty in-memory store, which leaves only the built-in default.
    """

    def __init__(self, store: Optional[TemplateStore] = None):
        self.store = store if store is not None else InMemoryTemplateStore()
        self._cache: Dict[Tuple[Optional[str], str], str] = {}

    def template_keys(self, template_name: str, scope: Optional[str] = None) -> List[str]:
        """Store keys checked for a name, in lookup order."""
        keys = []
        if scope:
            keys.append(f"{scope}{TEMPLATE_NAMESPACE}{template_name}")
        keys.append(f"{TEMPLATE_NAMESPACE}{template_name}")
        return keys

    def get_template_text(self, template_name: str, scope: Optional[str] = None) -> str:
        """
        Get template text by name, loading and caching it if necessary.

        Args:
            template_name: Template name (e.g., 'cruise')
            scope: Caller key prefix searched before the shared tier

        Returns:
            Template text

        Raises:
            TemplateNotFound: If no tier has the template
        """
        cache_key = (scope or None, template_name)
        if cache_key in self._cache:
            return self._cache[cache_key]

        checked = self.template_keys(template_name, scope)
        text = None
        for tier, key in zip(_tiers(scope), checked):
            candidate = self.store.get(key)
            if candidate:
                text = candidate
                log_template_resolved(template_name, tier, scope)
                break
            _log_debug(f"Template key missing: {key}")

        if text is None:
            if template_name != DEFAULT_TEMPLATE_NAME:
                raise TemplateNotFound(template_name, scope=scope, checked_keys=checked)
            text = DEFAULT_TEMPLATE
            log_template_resolved(template_name, "built-in", scope)

        self._cache[cache_key] = text
        return text

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str, scope: Optional[str] = None) -> bool:
        """
        Check if a template is in the cache.

        Args:
            template_name: Template name
            scope: Caller key prefix the template was resolved for

        Returns:
            True if cached, False otherwise
        """
        return (scope or None, template_name) in self._cache

    def list_available_templates(self, scope: Optional[str] = None) -> TemplateListing:
        """
        List the scoped and shared template names for a caller.

        Names starting with "_" are internal and hidden.
        """
        scoped = self._names_under(f"{scope}{TEMPLATE_NAMESPACE}") if scope else []
        shared = self._names_under(TEMPLATE_NAMESPACE)

        if DEFAULT_TEMPLATE_NAME in shared:
            default_template = DEFAULT_TEMPLATE_NAME
        elif shared:
            default_template = shared[0]
        else:
            default_template = DEFAULT_TEMPLATE_NAME

        return TemplateListing(scoped=scoped, shared=shared, default_template=default_template)

    def _names_under(self, prefix: str) -> List[str]:
        names = [key[len(prefix):] for key in self.store.list_keys(prefix)]
        return [name for name in names if name and not name.startswith("_")]


def _tiers(scope: Optional[str]) -> List[str]:
    return ["scoped", "shared"] if scope else ["shared"]


def _chosen(name: Any) -> Optional[str]:
    """A template name that counts as a real choice ("default" never does)."""
    if isinstance(name, str) and name and name != DEFAULT_TEMPLATE_NAME:
        return name
    return None


def _profile_template(profile: Any) -> Any:
    if profile is None:
        return None
    if isinstance(profile, Mapping):
        return profile.get("template")
    return getattr(profile, "template", None)


def resolve_template_name(requested: Optional[str], profile: Any = None) -> str:
    """
    Pick a template name from an explicit request and the caller's profile.

    Examples:
        >>> resolve_template_name("cruise", None)
        'cruise'
        >>> resolve_template_name("default", {"template": "luxury"})
        'luxury'
        >>> resolve_template_name(None, None)
        'default'
    """
    return _chosen(requested) or _chosen(_profile_template(profile)) or DEFAULT_TEMPLATE_NAME


def select_template_name(requested: Optional[str], trip: Any, profile: Any = None) -> str:
    """
    Pick the template for a render: request, then the trip's own setting, then profile.

    The trip setting is `meta.template`, or a top-level `template`.
    """
    trip_choice = None
    if isinstance(trip, dict):
        meta = trip.get("meta")
        if isinstance(meta, dict):
            trip_choice = _chosen(meta.get("template"))
        trip_choice = trip_choice or _chosen(trip.get("template"))

    return _chosen(requested) or trip_choice or resolve_template_name(None, profile)
