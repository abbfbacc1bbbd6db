"""Custom exceptions for templating context with template references."""

from typing import Optional, Sequence


class TemplateNotFound(LookupError):
    """
    Exception raised when a requested template exists in no lookup tier.

    This is the only error the rendering core lets escape: malformed tags,
    unresolved paths and unmatched blocks all degrade silently.

    Attributes:
        template_name: Name of the template that was requested
        scope: Caller scope (key prefix) that was searched first, if any
        checked_keys: Store keys that were tried, in lookup order
    """

    def __init__(
        self,
        template_name: str,
        scope: Optional[str] = None,
        checked_keys: Optional[Sequence[str]] = None,
    ):
        self.template_name = template_name
        self.scope = scope
        self.checked_keys = list(checked_keys or [])

        parts = [f"Template '{template_name}' not found"]

        if scope:
            parts.append(f"Scope: {scope}")

        if self.checked_keys:
            parts.append(f"Checked keys: {', '.join(self.checked_keys)}")

        super().__init__("\n".join(parts))
