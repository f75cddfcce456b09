"""Subject and Resource value objects passed to rules."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

__all__ = ["Resource", "Subject"]


def _freeze(attributes: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(attributes))


@dataclass(frozen=True, slots=True)
class Subject:
    """The principal attempting an action.

    Attributes:
        id: Opaque identifier of the principal.
        attributes: Read-only claims about the principal (roles,
            organisation, ownership claims).

    Example::

        alice = Subject(id=7, attributes={"roles": ["editor"]})
        alice.get("roles")   # ["editor"]
        "editor" in alice.roles  # True
    """

    id: Any
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    def __hash__(self) -> int:
        return hash(self.id)

    def get(self, key: str, default: Any = None) -> Any:
        """Return attribute *key*, or *default* when absent."""
        return self.attributes.get(key, default)

    @property
    def roles(self) -> frozenset[str]:
        """The ``roles`` attribute as a set; a single string counts as one role."""
        roles = self.attributes.get("roles", ())
        if isinstance(roles, str):
            return frozenset((roles,))
        return frozenset(roles)


@dataclass(frozen=True, slots=True)
class Resource:
    """The entity an action targets.

    Attributes:
        id: Opaque identifier of the entity (``None`` for unsaved ones).
        attributes: Read-only facts about the entity (owner id, status).

    Example::

        terrain = Resource(id=12, attributes={"owner_id": 7})
        terrain.get("owner_id")  # 7
    """

    id: Any
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    def __hash__(self) -> int:
        return hash(self.id)

    def get(self, key: str, default: Any = None) -> Any:
        """Return attribute *key*, or *default* when absent."""
        return self.attributes.get(key, default)

    @classmethod
    def from_model(
        cls,
        instance: object,
        *,
        include: Collection[str] | None = None,
    ) -> Resource:
        """Build a Resource from a SQLAlchemy mapped instance.

        The primary key becomes ``id`` (a tuple for composite keys) and
        the column attributes already loaded on the instance become
        ``attributes``. Unloaded (deferred or expired) columns are
        skipped rather than triggering a database round-trip.

        Args:
            instance: A mapped SQLAlchemy model instance.
            include: Optional attribute names to keep; all loaded columns
                are kept when omitted.

        Raises:
            TypeError: If *instance* is not a mapped instance.

        Example::

            terrain = session.get(Terrain, 12)
            resource = Resource.from_model(terrain)
            engine.authorize(user, Terrain, "update", resource)
        """
        try:
            state = sa_inspect(instance)
        except NoInspectionAvailable as exc:
            raise TypeError(
                f"{type(instance).__name__} is not a mapped SQLAlchemy instance"
            ) from exc

        mapper = state.mapper
        unloaded = state.unloaded
        attributes: dict[str, Any] = {}
        for prop in mapper.column_attrs:
            if include is not None and prop.key not in include:
                continue
            if prop.key in unloaded:
                continue
            attributes[prop.key] = state.attrs[prop.key].loaded_value

        pk_keys = [mapper.get_property_by_column(col).key for col in mapper.primary_key]
        pk_values = [None if key in unloaded else state.attrs[key].loaded_value for key in pk_keys]
        identity: Any = pk_values[0] if len(pk_values) == 1 else tuple(pk_values)
        return cls(id=identity, attributes=attributes)
