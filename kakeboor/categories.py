"""Category model and its request and response shapes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from kakeboor.types import (
    CategoryType,
    ValidationError,
    _enum,
    _mapping,
    _opt_str,
    _rfc3339,
    _str,
)

NAME_MESSAGE = "Name must be between 1 and 100 characters"
ICON_MESSAGE = "Icon must be at most 50 characters"
COLOR_MESSAGE = "Color must be at most 7 characters"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(kw_only=True)
class Category:
    """A stored category for organising transactions."""

    id: int | None = None
    name: str
    category_type: str
    icon: str | None = None
    color: str | None = None
    created_at: datetime = field(default_factory=_now)

    def resolved_type(self) -> CategoryType:
        """The category type as an enum, falling back to expense."""
        try:
            return CategoryType.parse(self.category_type)
        except ValidationError:
            return CategoryType.EXPENSE


def _check_lengths(
    name: str | None, icon: str | None, color: str | None
) -> dict[str, str]:
    errors: dict[str, str] = {}
    if name is not None and not 1 <= len(name) <= 100:
        errors["name"] = NAME_MESSAGE
    if icon is not None and len(icon) > 50:
        errors["icon"] = ICON_MESSAGE
    if color is not None and len(color) > 7:
        errors["color"] = COLOR_MESSAGE
    return errors


def _raise_if(errors: dict[str, str]) -> None:
    if errors:
        raise ValidationError(
            "; ".join(f"{key}: {message}" for key, message in errors.items()), errors
        )


@dataclass
class CreateCategoryRequest:
    """Payload for creating a category."""

    name: str
    category_type: CategoryType
    icon: str | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateCategoryRequest:
        data = _mapping(data)
        return cls(
            name=_str(data, "name"),
            category_type=_enum(data, "category_type", CategoryType),
            icon=_opt_str(data, "icon"),
            color=_opt_str(data, "color"),
        )

    def validate(self) -> CreateCategoryRequest:
        """Check field lengths; raise ValidationError listing every failure."""
        _raise_if(_check_lengths(self.name, self.icon, self.color))
        return self


@dataclass
class UpdateCategoryRequest:
    """Payload for changing a category; absent fields are left alone."""

    name: str | None = None
    icon: str | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateCategoryRequest:
        data = _mapping(data)
        return cls(
            name=_opt_str(data, "name"),
            icon=_opt_str(data, "icon"),
            color=_opt_str(data, "color"),
        )

    def validate(self) -> UpdateCategoryRequest:
        """Check field lengths; raise ValidationError listing every failure."""
        _raise_if(_check_lengths(self.name, self.icon, self.color))
        return self

    def apply(self, category: Category) -> Category:
        """Return a copy of the category with the given fields replaced."""
        changes = {
            key: value
            for key, value in (("name", self.name), ("icon", self.icon), ("color", self.color))
            if value is not None
        }
        return replace(category, **changes)


@dataclass(frozen=True)
class CategoryResponse:
    """A category as returned by the API."""

    id: int
    name: str
    category_type: CategoryType
    icon: str | None
    color: str | None
    created_at: str

    @classmethod
    def from_category(cls, category: Category) -> CategoryResponse:
        return cls(
            id=category.id if category.id is not None else 0,
            name=category.name,
            category_type=category.resolved_type(),
            icon=category.icon,
            color=category.color,
            created_at=_rfc3339(category.created_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category_type": self.category_type.value,
            "icon": self.icon,
            "color": self.color,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class CategoryListResponse:
    """A counted list of category responses."""

    count: int
    results: list[CategoryResponse]

    @classmethod
    def from_categories(cls, categories: Iterable[Category]) -> CategoryListResponse:
        results = [CategoryResponse.from_category(category) for category in categories]
        return cls(count=len(results), results=results)

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "results": [item.to_dict() for item in self.results]}