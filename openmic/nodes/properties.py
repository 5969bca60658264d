"""
Declarative node schema.

These dataclasses describe node parameters the way a workflow host renders
them: a typed field, an optional list of choices, and ``show`` rules that
make the field visible only for certain resource/operation combinations.
``to_dict`` produces the camelCase JSON the host consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class NodePropertyOption:
    """One choice of an ``options`` field, or a sub-field of a ``collection``."""
    name: str
    value: Any = None
    action: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "value": self.value}
        if self.action:
            data["action"] = self.action
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class NodeProperty:
    """
    A single node parameter.

    Attributes:
        display_name: Label shown to the user
        name: Parameter key the host resolves
        type: Field type (string, number, boolean, options, collection, json, dateTime)
        default: Value used when the user leaves the field untouched
        options: Choices for ``options`` fields
        fields: Sub-fields for ``collection`` fields
        show: Visibility rules, parameter name -> allowed values
        type_options: Extra type settings (minValue, maxValue, password, loadOptionsMethod)
    """
    display_name: str
    name: str
    type: str
    default: Any = ""
    description: Optional[str] = None
    required: bool = False
    placeholder: Optional[str] = None
    no_data_expression: bool = False
    options: List[NodePropertyOption] = field(default_factory=list)
    fields: List["NodeProperty"] = field(default_factory=list)
    show: Dict[str, List[Any]] = field(default_factory=dict)
    type_options: Dict[str, Any] = field(default_factory=dict)

    def is_visible(self, parameters: Dict[str, Any]) -> bool:
        """True when every ``show`` rule matches the current parameter values."""
        return all(parameters.get(name) in allowed for name, allowed in self.show.items())

    def option_values(self) -> List[Any]:
        return [option.value for option in self.options]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }
        if self.description:
            data["description"] = self.description
        if self.required:
            data["required"] = True
        if self.placeholder:
            data["placeholder"] = self.placeholder
        if self.no_data_expression:
            data["noDataExpression"] = True
        if self.type_options:
            data["typeOptions"] = dict(self.type_options)
        if self.show:
            data["displayOptions"] = {"show": {k: list(v) for k, v in self.show.items()}}
        if self.options:
            data["options"] = [option.to_dict() for option in self.options]
        if self.fields:
            data["options"] = [prop.to_dict() for prop in self.fields]
        return data


@dataclass
class NodeDescription:
    """Everything the host needs to render and wire a node."""
    display_name: str
    name: str
    description: str
    group: List[str]
    properties: List[NodeProperty]
    version: int = 1
    subtitle: Optional[str] = None
    icon: str = "file:openmic.svg"
    inputs: List[str] = field(default_factory=lambda: ["main"])
    outputs: List[str] = field(default_factory=lambda: ["main"])
    credentials: List[Dict[str, Any]] = field(
        default_factory=lambda: [{"name": "openMicApi", "required": True}]
    )
    polling: bool = False
    usable_as_tool: bool = False

    def visible_properties(self, parameters: Dict[str, Any]) -> List[NodeProperty]:
        return [prop for prop in self.properties if prop.is_visible(parameters)]

    def get_property(self, name: str, parameters: Dict[str, Any]) -> Optional[NodeProperty]:
        """Return the visible property called ``name``; several may share a name."""
        for prop in self.visible_properties(parameters):
            if prop.name == name:
                return prop
        return None

    def resolve(self, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fill in defaults for every visible property the host left unset.

        Visibility depends on earlier values (resource, operation), so the
        properties are walked in declaration order.
        """
        resolved = dict(parameters)
        for prop in self.properties:
            if prop.name in resolved or not prop.is_visible(resolved):
                continue
            resolved[prop.name] = prop.default
        return resolved

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "icon": self.icon,
            "group": list(self.group),
            "version": self.version,
            "description": self.description,
            "defaults": {"name": self.display_name},
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "credentials": list(self.credentials),
            "properties": [prop.to_dict() for prop in self.properties],
        }
        if self.subtitle:
            data["subtitle"] = self.subtitle
        if self.polling:
            data["polling"] = True
        if self.usable_as_tool:
            data["usableAsTool"] = True
        return data
