from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol

from ..errors import UnsupportedDialect
from ..types import MaskType, Operation


class SQLDialect(Protocol):
    name: str
    templates: Mapping[Operation, str]
    mask_templates: Mapping[MaskType, str]

    def quote_ident(self, ident: str) -> str: ...
    def render(self, operation: Operation, **slots: Any) -> str: ...
    def render_mask(self, mask_type: MaskType, **slots: Any) -> str: ...


class TemplateDialect:
    """
    Shared rendering for dialects whose fragments are plain `str.format` templates.

    Subclasses only declare `name`, `templates` and `mask_templates`; literal
    braces inside regular expressions are doubled in the templates.
    """
    name = ""
    templates: Dict[Operation, str] = {}
    mask_templates: Dict[MaskType, str] = {}

    def quote_ident(self, ident: str) -> str:
        return ".".join(f'"{part}"' for part in ident.split("."))

    def render(self, operation: Operation, **slots: Any) -> str:
        template = self.templates.get(operation)
        if template is None:
            raise UnsupportedDialect(self.name, operation, supported=[])
        return template.format(**slots)

    def render_mask(self, mask_type: MaskType, **slots: Any) -> str:
        template = self.mask_templates.get(mask_type)
        if template is None:
            raise UnsupportedDialect(self.name, Operation.MASK_SENSITIVE_DATA, supported=[])
        return template.format(**slots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
