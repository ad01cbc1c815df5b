"""Attribute-driven object factories and the directional antenna helper."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from terasim.antenna import DirectionalAntenna

__all__ = ["ObjectFactory", "DirectionalAntennaHelper"]


@dataclass(frozen=True)
class _TypeInfo:
    """A registered type: the class to build and its attribute name aliases."""

    cls: Callable[..., Any]
    aliases: Mapping[str, str] = field(default_factory=dict)


_TYPES: dict[str, _TypeInfo] = {
    "DirectionalAntenna": _TypeInfo(
        DirectionalAntenna,
        {
            "TuneRxTxMode": "mode",
            "BeamWidth": "beamwidth",
            "MaxGain": "max_gain",
            "TurningSpeed": "turn_speed",
            "InitialAngle": "initial_angle",
        },
    ),
}

TypeSpec = Union[str, Callable[..., Any]]


class ObjectFactory:
    """Builds objects of one type with a stored set of attribute values.

    The type is either the name of a registered type or any callable.
    Attribute names may be given in their registered alias form (for
    instance ``"MaxGain"``) or as the keyword the type accepts.
    """

    def __init__(self, type_: Optional[TypeSpec] = None, **kwargs: Any) -> None:
        self._cls: Optional[Callable[..., Any]] = None
        self._aliases: dict[str, str] = {}
        self._type_name: Optional[str] = None
        self.attributes: dict[str, Any] = {}
        if type_ is not None:
            self.set_type(type_, **kwargs)

    @property
    def type_name(self) -> Optional[str]:
        """Name of the type this factory builds, or None if none is set."""
        return self._type_name

    def set_type(self, type_: TypeSpec, **kwargs: Any) -> None:
        """Choose the type to build and set any attributes given as keywords."""
        if isinstance(type_, str):
            try:
                info = _TYPES[type_]
            except KeyError:
                raise ValueError(f"unknown type {type_!r}") from None
            self._cls = info.cls
            self._aliases = dict(info.aliases)
            self._type_name = type_
        elif callable(type_):
            self._cls = type_
            self._aliases = {}
            self._type_name = getattr(type_, "__name__", repr(type_))
        else:
            raise TypeError(f"type must be a name or a callable, got {type_!r}")
        for name, value in kwargs.items():
            self.set(name, value)

    def _resolve(self, name: str) -> str:
        key = self._aliases.get(name, name)
        if dataclasses.is_dataclass(self._cls):
            valid = {f.name for f in dataclasses.fields(self._cls) if f.init}
            if key not in valid:
                raise ValueError(f"unknown attribute {name!r} for type {self._type_name}")
        return key

    def set(self, name: str, value: Any) -> None:
        """Store an attribute value; an empty name is ignored."""
        if not name:
            return
        if self._cls is None:
            raise RuntimeError("no type set on this factory")
        self.attributes[self._resolve(name)] = value

    def create(self) -> Any:
        """Build a new object with the stored attributes."""
        if self._cls is None:
            raise RuntimeError("no type set on this factory")
        return self._cls(**self.attributes)


class DirectionalAntennaHelper:
    """Creates identically configured directional antennas."""

    def __init__(self) -> None:
        self._factory = ObjectFactory()

    @classmethod
    def default(cls) -> "DirectionalAntennaHelper":
        """A helper that builds the standard directional antenna."""
        helper = cls()
        helper.set_type("DirectionalAntenna")
        return helper

    def set_type(self, type_: TypeSpec, **kwargs: Any) -> None:
        """Choose the antenna type and set any attributes given as keywords."""
        self._factory.set_type(type_, **kwargs)

    def set(self, name: str, value: Any) -> None:
        """Set an attribute on every antenna created from now on."""
        self._factory.set(name, value)

    def create(self) -> DirectionalAntenna:
        """Build a new antenna."""
        antenna = self._factory.create()
        if not isinstance(antenna, DirectionalAntenna):
            raise TypeError(f"factory built {type(antenna).__name__}, not a directional antenna")
        return antenna