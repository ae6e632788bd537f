"""Component kinds, aliases and entity names."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidKind, InvalidName


class ComponentKind(str, Enum):
    """Canonical component kinds accepted by ``pillars add``."""
    MODEL = "model"
    REPOSITORY = "repository"
    SERVICE = "service"
    CONTROLLER = "controller"
    ROUTE = "route"
    RESOURCE = "resource"
    TEST = "test"


# Short alias -> canonical kind
KIND_ALIASES: dict[str, ComponentKind] = {
    "md": ComponentKind.MODEL,
    "rp": ComponentKind.REPOSITORY,
    "sv": ComponentKind.SERVICE,
    "ct": ComponentKind.CONTROLLER,
    "r": ComponentKind.ROUTE,
    "rs": ComponentKind.RESOURCE,
}

_LOOKUP: dict[str, ComponentKind] = {
    **{kind.value: kind for kind in ComponentKind},
    **KIND_ALIASES,
}


def valid_kind_names() -> list[str]:
    """Every accepted spelling, canonical kinds first, e.g. ``"model (md)"``."""
    names = []
    for kind in ComponentKind:
        aliases = [alias for alias, target in KIND_ALIASES.items() if target is kind]
        names.append(f"{kind.value} ({', '.join(aliases)})" if aliases else kind.value)
    return names


def resolve_kind(value: str) -> ComponentKind:
    """Map a user-supplied kind or alias to its canonical ``ComponentKind``.

    Matching is case-insensitive.

    Raises:
        InvalidKind: If *value* is not a known kind or alias.
    """
    kind = _LOOKUP.get(value.lower())
    if kind is None:
        raise InvalidKind(value, valid_kind_names())
    return kind


# ---------------------------------------------------------------------------
# Entity names
# ---------------------------------------------------------------------------

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


@dataclass(frozen=True)
class EntityName:
    """The two spellings of an entity used across generated files.

    ``lower`` is the name exactly as given (file paths, variables) and
    ``capitalized`` has its first letter uppercased (class names).
    """

    lower: str
    capitalized: str

    @classmethod
    def parse(cls, name: str) -> "EntityName":
        """Validate *name* and derive both forms.

        Raises:
            InvalidName: If *name* is not a bare JavaScript identifier.
        """
        if not _IDENTIFIER_RE.fullmatch(name):
            raise InvalidName(name)
        return cls(lower=name, capitalized=name[:1].upper() + name[1:])
