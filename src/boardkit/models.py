"""Data models for boardkit boards, cards and filters."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Any, Union

PROPERTY_TYPES = (
    "text",
    "number",
    "select",
    "multiSelect",
    "date",
    "person",
    "multiPerson",
    "checkbox",
    "url",
    "email",
    "phone",
    "createdTime",
    "createdBy",
    "updatedTime",
    "updatedBy",
    "card",
    "file",
    "unknown",
)

FILTER_CONDITIONS = (
    "includes",
    "notIncludes",
    "isEmpty",
    "isNotEmpty",
    "isSet",
    "isNotSet",
    "is",
    "contains",
    "notContains",
    "startsWith",
    "notStartsWith",
    "endsWith",
    "notEndsWith",
    "isBefore",
    "isAfter",
)

PropertyValue = Union[str, list[str]]


def _camel(name: str) -> str:
    """Convert snake_case to camelCase: "show_description" -> "showDescription"."""
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class PropertyOption:
    """A choice of a select-like property."""

    id: str
    value: str = ""
    color: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PropertyOption:
        return cls(id=str(d["id"]), value=str(d.get("value", "")), color=str(d.get("color", "")))

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class PropertyTemplate:
    """A card property definition on a board.

    ``index`` is only set on templates carried by a patch, where it
    records the template's display position.
    """

    id: str
    name: str = ""
    type: str = "text"
    options: tuple[PropertyOption, ...] = ()
    index: int | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PropertyTemplate:
        type_ = d.get("type", "text")
        if type_ not in PROPERTY_TYPES:
            raise ValueError(f"Unknown property type '{type_}' for property '{d.get('id')}'")
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", "")),
            type=type_,
            options=tuple(PropertyOption.from_dict(o) for o in d.get("options") or ()),
            index=d.get("index"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "options": [o.to_dict() for o in self.options],
        }
        if self.index is not None:
            d["index"] = self.index
        return d

    def find_option(self, option_id: str) -> PropertyOption | None:
        """Return the option with option_id, or None if it was deleted."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None


def _text(value: Any) -> str:
    """Stored scalar as a string; None is ""."""
    return "" if value is None else str(value)


def _millis(value: Any) -> int:
    """Epoch milliseconds from a stored timestamp.

    YAML may hand back a date or datetime; naive ones are UTC.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, bool):
        raise ValueError(f"Expected a number or date, got {value!r}")
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise ValueError(f"Expected a number or date, got {value!r}") from None


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _coerce_scalar(default: Any, value: Any) -> Any:
    """Coerce a stored scalar to the type of its field default."""
    if isinstance(default, bool):
        return _flag(value)
    if isinstance(default, int):
        return _millis(value)
    return _text(value)


def _property_values(raw: dict[str, Any]) -> dict[str, PropertyValue]:
    """Coerce stored property values to strings or lists of strings."""
    values: dict[str, PropertyValue] = {}
    for key, value in raw.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            values[str(key)] = [str(v) for v in value]
        elif isinstance(value, bool):
            values[str(key)] = "true" if value else ""
        else:
            values[str(key)] = str(value)
    return values


@dataclass
class Card:
    """A card and its property values, keyed by template id."""

    id: str
    title: str = ""
    created_by: str = ""
    modified_by: str = ""
    create_at: int = 0
    update_at: int = 0
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    board_id: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Card:
        return cls(
            id=str(d["id"]),
            title=_text(d.get("title")),
            created_by=_text(d.get("createdBy")),
            modified_by=_text(d.get("modifiedBy")),
            create_at=_millis(d.get("createAt")),
            update_at=_millis(d.get("updateAt")),
            properties=_property_values(d.get("properties") or {}),
            board_id=_text(d.get("boardId")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "boardId": self.board_id,
            "title": self.title,
            "createdBy": self.created_by,
            "modifiedBy": self.modified_by,
            "createAt": self.create_at,
            "updateAt": self.update_at,
            "properties": dict(self.properties),
        }


@dataclass
class Board:
    """A board record: scalar fields plus the property schema."""

    id: str
    team_id: str = ""
    channel_id: str = ""
    created_by: str = ""
    modified_by: str = ""
    type: str = "P"
    minimum_role: str = ""
    title: str = ""
    description: str = ""
    icon: str = ""
    show_description: bool = False
    is_template: bool = False
    template_version: int = 0
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    card_properties: list[PropertyTemplate] = field(default_factory=list)
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Board:
        kwargs: dict[str, Any] = {}
        defaults = {f.name: f.default for f in fields(cls) if f.default is not MISSING}
        for name in board_scalar_fields():
            key = _camel(name)
            if key in d and name in defaults:
                kwargs[name] = _coerce_scalar(defaults[name], d[key])
        kwargs["id"] = str(d.get("id", ""))
        kwargs["properties"] = dict(d.get("properties") or {})
        kwargs["card_properties"] = [PropertyTemplate.from_dict(t) for t in d.get("cardProperties") or ()]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        d = {_camel(name): getattr(self, name) for name in board_scalar_fields()}
        d["properties"] = dict(self.properties)
        d["cardProperties"] = [t.to_dict() for t in self.card_properties]
        return d

    def find_template(self, property_id: str) -> PropertyTemplate | None:
        return find_template(self.card_properties, property_id)


def board_scalar_fields() -> list[str]:
    """Names of the Board fields compared one by one when diffing."""
    return [f.name for f in fields(Board) if f.name not in ("properties", "card_properties")]


def find_template(templates, property_id: str) -> PropertyTemplate | None:
    """Find a template by id in a list of templates."""
    for template in templates:
        if template.id == property_id:
            return template
    return None


@dataclass
class BoardPatch:
    """Delta between two versions of a board.

    Scalar slots left as None are unchanged. The list and dict members
    are always present, possibly empty.
    """

    id: str | None = None
    team_id: str | None = None
    channel_id: str | None = None
    created_by: str | None = None
    modified_by: str | None = None
    type: str | None = None
    minimum_role: str | None = None
    title: str | None = None
    description: str | None = None
    icon: str | None = None
    show_description: bool | None = None
    is_template: bool | None = None
    template_version: int | None = None
    create_at: int | None = None
    update_at: int | None = None
    delete_at: int | None = None
    updated_properties: dict[str, PropertyValue] = field(default_factory=dict)
    deleted_properties: list[str] = field(default_factory=list)
    updated_card_properties: list[PropertyTemplate] = field(default_factory=list)
    deleted_card_properties: list[str] = field(default_factory=list)

    def scalar_changes(self) -> dict[str, Any]:
        """Return {field_name: value} for the scalar slots that are set."""
        return {
            name: getattr(self, name) for name in board_scalar_fields() if getattr(self, name) is not None
        }

    def to_dict(self) -> dict[str, Any]:
        d = {_camel(name): value for name, value in self.scalar_changes().items()}
        d["updatedProperties"] = dict(self.updated_properties)
        d["deletedProperties"] = list(self.deleted_properties)
        d["updatedCardProperties"] = [t.to_dict() for t in self.updated_card_properties]
        d["deletedCardProperties"] = list(self.deleted_card_properties)
        return d


@dataclass
class FilterClause:
    """Leaf of a filter tree."""

    property_id: str
    condition: str
    values: list[str] = field(default_factory=list)
    kind: str = field(default="clause", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "propertyId": self.property_id,
            "condition": self.condition,
            "values": list(self.values),
        }


@dataclass
class FilterGroup:
    """Interior node of a filter tree."""

    operation: str = "and"
    filters: list[FilterNode] = field(default_factory=list)
    kind: str = field(default="group", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "operation": self.operation,
            "filters": [f.to_dict() for f in self.filters],
        }


FilterNode = Union[FilterClause, FilterGroup]


def filter_from_dict(d: dict[str, Any]) -> FilterNode:
    """Build a filter tree node from its record form.

    Uses the ``kind`` tag when present; untagged records are
    groups if they carry ``operation`` or ``filters``.
    """
    kind = d.get("kind")
    if kind is None:
        kind = "group" if ("operation" in d or "filters" in d) else "clause"
    if kind == "group":
        return FilterGroup(
            operation=d.get("operation", "and"),
            filters=[filter_from_dict(f) for f in d.get("filters") or ()],
        )
    if kind == "clause":
        return FilterClause(
            property_id=str(d["propertyId"]),
            condition=d["condition"],
            values=[str(v) for v in d.get("values") or ()],
        )
    raise ValueError(f"Unknown filter node kind '{kind}'")


@dataclass
class BoardGroup:
    """A bucket of cards sharing a grouping value."""

    option: PropertyOption
    cards: list[Card] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"option": self.option.to_dict(), "cards": [c.id for c in self.cards]}


@dataclass
class GroupResult:
    """Visible and hidden buckets produced by grouping."""

    visible: list[BoardGroup] = field(default_factory=list)
    hidden: list[BoardGroup] = field(default_factory=list)


@dataclass
class BoardView:
    """A saved view: a filter tree plus grouping configuration."""

    id: str
    title: str = ""
    group_by_id: str = ""
    visible_option_ids: list[str] = field(default_factory=list)
    hidden_option_ids: list[str] = field(default_factory=list)
    filter: FilterGroup = field(default_factory=FilterGroup)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> BoardView:
        flt = filter_from_dict(d.get("filter") or {"operation": "and", "filters": []})
        if not isinstance(flt, FilterGroup):
            flt = FilterGroup(operation="and", filters=[flt])
        return cls(
            id=str(d["id"]),
            title=d.get("title", ""),
            group_by_id=d.get("groupById") or "",
            visible_option_ids=[str(o) for o in d.get("visibleOptionIds") or ()],
            hidden_option_ids=[str(o) for o in d.get("hiddenOptionIds") or ()],
            filter=flt,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "groupById": self.group_by_id,
            "visibleOptionIds": list(self.visible_option_ids),
            "hiddenOptionIds": list(self.hidden_option_ids),
            "filter": self.filter.to_dict(),
        }


@dataclass
class BoardSnapshot:
    """A board with its cards and views, as loaded from disk or git."""

    board: Board
    cards: list[Card] = field(default_factory=list)
    views: dict[str, BoardView] = field(default_factory=dict)
    path: str = ""
    rev: str | None = None
