"""Workflow node definitions for OpenMic."""

from openmic.nodes.action import OpenMicNode
from openmic.nodes.properties import NodeDescription, NodeProperty, NodePropertyOption
from openmic.nodes.trigger import OpenMicTrigger

__all__ = [
    "NodeDescription",
    "NodeProperty",
    "NodePropertyOption",
    "OpenMicNode",
    "OpenMicTrigger",
]
