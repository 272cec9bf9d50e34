"""
Server configuration models for an embedded OrientDB server.

These models mirror the sections of OrientDB's orientdb-server-config.xml:
users, network (protocols and listeners) and server properties. A
ServerConfiguration is frozen once built and is rendered to XML right
before the server process is launched.
"""

import re
import xml.etree.ElementTree as ET
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


BINARY_PROTOCOL_NAME = "binary"
BINARY_PROTOCOL_IMPLEMENTATION = (
    "com.orientechnologies.orient.server.network.protocol.binary.ONetworkProtocolBinary"
)

_PORT_RANGE_PATTERN = re.compile(r"[0-9]+(-[0-9]+)?")


class ServerUserConfiguration(BaseModel):
    """A user account registered on the server."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Account name")
    password: str = Field(..., description="Account password")
    resources: str = Field(default="*", description="Resources the account may access")


class ServerEntryConfiguration(BaseModel):
    """A single name/value server property."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    value: str


class NetworkProtocolConfiguration(BaseModel):
    """A network protocol registration."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    implementation: str = Field(..., min_length=1)


class NetworkListenerConfiguration(BaseModel):
    """A network listener bound to an address and port range."""
    model_config = ConfigDict(frozen=True)

    ip_address: str = Field(default="0.0.0.0", description="Address to bind, 0.0.0.0 for all")
    port_range: str = Field(..., description="Single port or low-high range")
    protocol: str = Field(default=BINARY_PROTOCOL_NAME)
    socket: str = Field(default="default")

    @field_validator("port_range")
    @classmethod
    def validate_port_range(cls, v):
        """Validate the port range is '<int>' or '<int>-<int>'."""
        v = v.strip()
        if not _PORT_RANGE_PATTERN.fullmatch(v):
            raise ValueError(f"Invalid port range '{v}'. Expected '<port>' or '<low>-<high>'")
        return v

    @property
    def ports(self) -> Tuple[int, int]:
        """Return the (low, high) ports of the range."""
        low, _, high = self.port_range.partition("-")
        return int(low), int(high or low)


class NetworkConfiguration(BaseModel):
    """Network section: protocols and the listeners that use them."""
    model_config = ConfigDict(frozen=True)

    protocols: Tuple[NetworkProtocolConfiguration, ...] = ()
    listeners: Tuple[NetworkListenerConfiguration, ...] = ()


class ServerConfiguration(BaseModel):
    """
    Complete configuration handed to the server at startup.

    Built once, consumed by EmbeddedServer.startup and not modified
    afterwards.
    """
    model_config = ConfigDict(frozen=True)

    users: Tuple[ServerUserConfiguration, ...] = ()
    network: NetworkConfiguration = Field(default_factory=NetworkConfiguration)
    properties: Tuple[ServerEntryConfiguration, ...] = ()

    def get_property(self, name: str) -> Optional[str]:
        """Return the value of the named server property, if set."""
        for entry in self.properties:
            if entry.name == name:
                return entry.value
        return None

    def get_user(self, name: str) -> Optional[ServerUserConfiguration]:
        """Return the named user, if registered."""
        for user in self.users:
            if user.name == name:
                return user
        return None

    def to_xml(self) -> str:
        """
        Render the configuration as an orientdb-server-config.xml document.

        Returns:
            str: The XML document, including the XML declaration
        """
        root = ET.Element("orient-server")
        ET.SubElement(root, "handlers")

        network = ET.SubElement(root, "network")
        protocols = ET.SubElement(network, "protocols")
        for protocol in self.network.protocols:
            ET.SubElement(protocols, "protocol", {
                "name": protocol.name,
                "implementation": protocol.implementation,
            })
        listeners = ET.SubElement(network, "listeners")
        for listener in self.network.listeners:
            ET.SubElement(listeners, "listener", {
                "protocol": listener.protocol,
                "ip-address": listener.ip_address,
                "port-range": listener.port_range,
                "socket": listener.socket,
            })

        users = ET.SubElement(root, "users")
        for user in self.users:
            ET.SubElement(users, "user", {
                "name": user.name,
                "password": user.password,
                "resources": user.resources,
            })

        properties = ET.SubElement(root, "properties")
        for entry in self.properties:
            ET.SubElement(properties, "entry", {"name": entry.name, "value": entry.value})

        ET.indent(root, space="    ")
        body = ET.tostring(root, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n' + body + "\n"
