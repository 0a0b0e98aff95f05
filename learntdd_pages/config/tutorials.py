"""Tutorial registry configuration builders."""

from __future__ import annotations

import typing as typ

from .helpers import _optional_str, _parse_bool, _parse_enum, _required_str
from .models import (
    FrameworkTutorial,
    SiteConfigError,
    TutorialCategory,
    TutorialRegistry,
)


def _build_tutorial_registry(
    entries: list[typ.Mapping[str, object]] | None,
) -> TutorialRegistry:
    """Build the ordered tutorial registry from the ``tutorials`` list."""
    match entries:
        case None:
            return TutorialRegistry()
        case list() as items:
            pass
        case _:
            msg = "The 'tutorials' block must be a list."
            raise SiteConfigError(msg)
    tutorials: list[FrameworkTutorial] = []
    for entry in items:
        match entry:
            case dict():
                tutorials.append(_build_tutorial(entry))
            case _:
                msg = f"Tutorial entries must be mappings, got {entry!r}."
                raise SiteConfigError(msg)
    return TutorialRegistry(entries=tuple(tutorials))


def _build_tutorial(payload: typ.Mapping[str, typ.Any]) -> FrameworkTutorial:
    """Build a single tutorial entry."""
    name = _required_str(payload, "name", "Tutorial entry")
    route = _required_str(payload, "route", f"Tutorial '{name}'")
    if not route.startswith("/"):
        msg = f"Tutorial '{name}' route must start with '/', got '{route}'."
        raise SiteConfigError(msg)
    category = _parse_enum(
        TutorialCategory,
        payload.get("category"),
        field=f"category for tutorial '{name}'",
        default=TutorialCategory.FEATURED,
    )
    return FrameworkTutorial(
        name=name,
        route=route,
        logo=_optional_str(payload.get("logo")),
        category=category,
        logo_alt=_optional_str(payload.get("logo_alt")) or f"{name} logo",
        home=_parse_bool(
            payload.get("home"), field=f"Tutorial '{name}' 'home'", default=True
        ),
    )


__all__ = ["_build_tutorial", "_build_tutorial_registry"]
