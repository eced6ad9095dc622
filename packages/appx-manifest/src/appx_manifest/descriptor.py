# SPDX-License-Identifier: MIT
"""The package descriptor (AppxManifest.xml) and its XML rendering.

The descriptor is rendered as an ElementTree. Every value taken from a
manifest or from the caller passes through :func:`xml_text` before it is
placed in a text node or attribute, and ElementTree escapes markup when the
tree is serialized, so manifest content can never produce malformed XML.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from .models import AccessRule

FOUNDATION_NS = "http://schemas.microsoft.com/appx/manifest/foundation/windows10"
MP_NS = "http://schemas.microsoft.com/appx/2014/phone/manifest"
UAP_NS = "http://schemas.microsoft.com/appx/manifest/uap/windows10"
BUILD_NS = "http://schemas.microsoft.com/developer/appx/2015/build"

ET.register_namespace("", FOUNDATION_NS)
ET.register_namespace("mp", MP_NS)
ET.register_namespace("uap", UAP_NS)
ET.register_namespace("build", BUILD_NS)

IGNORABLE_NAMESPACES = "uap mp build"
PHONE_PUBLISHER_ID = "00000000-0000-0000-0000-000000000000"

TARGET_DEVICE_FAMILY = "Windows.Universal"
TARGET_MIN_VERSION = "10.0.10069.0"
TARGET_MAX_VERSION_TESTED = "10.0.10069.0"

ACCESS_RULE_TYPE = "include"

XML_DECLARATION = b'<?xml version="1.0" encoding="utf-8" standalone="yes"?>\n'

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


@dataclass(frozen=True, slots=True)
class Capability:
    """A capability declared by every generated package."""

    element: str
    name: str


FIXED_CAPABILITIES: tuple[Capability, ...] = (
    Capability("Capability", "internetClient"),
    Capability("Capability", "privateNetworkClientServer"),
    Capability("DeviceCapability", "microphone"),
    Capability("DeviceCapability", "location"),
    Capability("DeviceCapability", "webcam"),
)


def xml_text(value: object) -> str:
    """Prepare a value for insertion as XML text or attribute content."""
    if value is None:
        return ""
    return _INVALID_XML_CHARS.sub("", str(value))


def _qualified(namespace: str, tag: str) -> str:
    return f"{{{namespace}}}{tag}"


def _sub(parent: ET.Element, namespace: str, tag: str, text: object = None, **attrs: object) -> ET.Element:
    element = ET.SubElement(
        parent,
        _qualified(namespace, tag),
        {name: xml_text(value) for name, value in attrs.items()},
    )
    if text is not None:
        element.text = xml_text(text)
    return element


@dataclass(frozen=True)
class PackageDescriptor:
    """A rendered-ready package descriptor.

    Attributes:
        identity_name: Package identity name
        version: Package version (four-part)
        publisher: Publisher subject
        phone_product_id: Stable unique id of the package
        generated_from: Name of the tool that generated the descriptor
        generation_date: UTC generation timestamp
        tool_version: Version of the generating tool
        display_name: App display name
        publisher_display_name: Publisher display name
        logo: Store logo path
        language: Resource language
        application_id: Sanitized application id
        start_page: Start URL of the app
        access_rules: Ordered content URI rules, base scope rule last
        description: App description
        background_color: Tile background color
        square150x150_logo: Large logo path
        square44x44_logo: Small logo path
        splash_screen: Splash image path
        rotation_preference: Initial rotation preference
        capabilities: Declared capabilities
    """

    identity_name: str
    version: str
    publisher: str
    phone_product_id: str
    generated_from: str
    generation_date: str
    tool_version: str
    display_name: str
    publisher_display_name: str
    logo: str
    language: str
    application_id: str
    start_page: str
    access_rules: tuple[AccessRule, ...]
    description: str
    background_color: str
    square150x150_logo: str
    square44x44_logo: str
    splash_screen: str
    rotation_preference: str
    capabilities: tuple[Capability, ...] = FIXED_CAPABILITIES

    def to_element(self) -> ET.Element:
        """Build the AppxManifest element tree."""
        package = ET.Element(
            _qualified(FOUNDATION_NS, "Package"),
            {"IgnorableNamespaces": IGNORABLE_NAMESPACES},
        )

        _sub(
            package,
            FOUNDATION_NS,
            "Identity",
            Name=self.identity_name,
            Version=self.version,
            Publisher=self.publisher,
        )
        _sub(
            package,
            MP_NS,
            "PhoneIdentity",
            PhoneProductId=self.phone_product_id,
            PhonePublisherId=PHONE_PUBLISHER_ID,
        )

        metadata = _sub(package, BUILD_NS, "Metadata")
        _sub(metadata, BUILD_NS, "Item", Name="GeneratedFrom", Value=self.generated_from)
        _sub(metadata, BUILD_NS, "Item", Name="GenerationDate", Value=self.generation_date)
        _sub(metadata, BUILD_NS, "Item", Name="ToolVersion", Value=self.tool_version)

        properties = _sub(package, FOUNDATION_NS, "Properties")
        _sub(properties, FOUNDATION_NS, "DisplayName", self.display_name)
        _sub(properties, FOUNDATION_NS, "PublisherDisplayName", self.publisher_display_name)
        _sub(properties, FOUNDATION_NS, "Logo", self.logo)

        dependencies = _sub(package, FOUNDATION_NS, "Dependencies")
        _sub(
            dependencies,
            FOUNDATION_NS,
            "TargetDeviceFamily",
            Name=TARGET_DEVICE_FAMILY,
            MinVersion=TARGET_MIN_VERSION,
            MaxVersionTested=TARGET_MAX_VERSION_TESTED,
        )

        resources = _sub(package, FOUNDATION_NS, "Resources")
        _sub(resources, FOUNDATION_NS, "Resource", Language=self.language)

        applications = _sub(package, FOUNDATION_NS, "Applications")
        application = _sub(
            applications,
            FOUNDATION_NS,
            "Application",
            Id=self.application_id,
            StartPage=self.start_page,
        )

        rules = _sub(application, UAP_NS, "ApplicationContentUriRules")
        for rule in self.access_rules:
            _sub(
                rules,
                UAP_NS,
                "Rule",
                Type=ACCESS_RULE_TYPE,
                WindowsRuntimeAccess=rule.api_access,
                Match=rule.url,
            )

        visual = _sub(
            application,
            UAP_NS,
            "VisualElements",
            DisplayName=self.display_name,
            Description=self.description,
            BackgroundColor=self.background_color,
            Square150x150Logo=self.square150x150_logo,
            Square44x44Logo=self.square44x44_logo,
        )
        _sub(visual, UAP_NS, "SplashScreen", Image=self.splash_screen)
        rotation = _sub(visual, UAP_NS, "InitialRotationPreference")
        _sub(rotation, UAP_NS, "Rotation", Preference=self.rotation_preference)

        capabilities = _sub(package, FOUNDATION_NS, "Capabilities")
        for capability in self.capabilities:
            _sub(capabilities, FOUNDATION_NS, capability.element, Name=capability.name)

        return package

    def to_xml(self, indent: bool = True) -> bytes:
        """Serialize the descriptor as UTF-8 XML with declaration."""
        tree = ET.ElementTree(self.to_element())
        if indent:
            ET.indent(tree, space="  ")
        return XML_DECLARATION + ET.tostring(tree.getroot(), encoding="utf-8", xml_declaration=False)

    def write(self, path: str | Path) -> Path:
        """Write the serialized descriptor to a file."""
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(self.to_xml())
        return out_path
