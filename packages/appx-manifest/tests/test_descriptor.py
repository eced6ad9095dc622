# SPDX-License-Identifier: MIT
"""Tests for the package descriptor XML rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path

import pytest

from appx_manifest import AccessRule, PackageDescriptor, xml_text
from appx_manifest.descriptor import (
    BUILD_NS,
    FOUNDATION_NS,
    MP_NS,
    UAP_NS,
    XML_DECLARATION,
)

NS = {"f": FOUNDATION_NS, "mp": MP_NS, "uap": UAP_NS, "build": BUILD_NS}


@pytest.fixture
def descriptor() -> PackageDescriptor:
    return PackageDescriptor(
        identity_name="Contoso.DemoApp",
        version="1.0.0.0",
        publisher="CN=Contoso",
        phone_product_id="3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        generated_from="appx-manifest",
        generation_date="2024-01-02T03:04:05Z",
        tool_version="0.1.0",
        display_name="Demo",
        publisher_display_name="Contoso Ltd",
        logo="images/store.png",
        language="en-us",
        application_id="Demo",
        start_page="https://example.com/",
        access_rules=(
            AccessRule("https://api.example.com/", "none"),
            AccessRule("https://example.com/", "all"),
        ),
        description="A demo app",
        background_color="aliceBlue",
        square150x150_logo="images/large.png",
        square44x44_logo="images/small.png",
        splash_screen="images/splash.png",
        rotation_preference="portrait",
    )


class TestXmlText:
    """Tests for xml_text."""

    def test_none(self) -> None:
        assert xml_text(None) == ""

    def test_strips_control_characters(self) -> None:
        assert xml_text("a\x00b\x01c\x1fd") == "abcd"

    def test_keeps_whitespace_and_unicode(self) -> None:
        assert xml_text("a\tb\nc\rd é 😀") == "a\tb\nc\rd é 😀"

    def test_markup_is_not_escaped_here(self) -> None:
        assert xml_text("<b>&</b>") == "<b>&</b>"


class TestPackageDescriptor:
    """Tests for PackageDescriptor rendering."""

    def test_declaration(self, descriptor: PackageDescriptor) -> None:
        xml = descriptor.to_xml()
        assert xml.startswith(XML_DECLARATION)
        assert xml.count(b"<?xml") == 1

    def test_default_namespace(self, descriptor: PackageDescriptor) -> None:
        xml = descriptor.to_xml()
        assert f'xmlns="{FOUNDATION_NS}"'.encode() in xml
        assert b"<Package " in xml
        assert b"<uap:ApplicationContentUriRules>" in xml

    def test_structure(self, descriptor: PackageDescriptor) -> None:
        root = ET.fromstring(descriptor.to_xml())

        identity = root.find("f:Identity", NS)
        assert identity.attrib == {
            "Name": "Contoso.DemoApp",
            "Version": "1.0.0.0",
            "Publisher": "CN=Contoso",
        }
        assert root.find("mp:PhoneIdentity", NS).get("PhoneProductId") == descriptor.phone_product_id
        assert [item.get("Name") for item in root.findall("build:Metadata/build:Item", NS)] == [
            "GeneratedFrom",
            "GenerationDate",
            "ToolVersion",
        ]
        assert root.findtext("f:Properties/f:DisplayName", namespaces=NS) == "Demo"
        assert root.findtext("f:Properties/f:Logo", namespaces=NS) == "images/store.png"
        assert root.find("f:Resources/f:Resource", NS).get("Language") == "en-us"

        application = root.find("f:Applications/f:Application", NS)
        assert application.get("Id") == "Demo"
        assert application.get("StartPage") == "https://example.com/"

        visual = application.find("uap:VisualElements", NS)
        assert visual.get("BackgroundColor") == "aliceBlue"
        assert visual.get("Square150x150Logo") == "images/large.png"
        assert visual.get("Square44x44Logo") == "images/small.png"
        assert visual.find("uap:SplashScreen", NS).get("Image") == "images/splash.png"
        assert visual.find("uap:InitialRotationPreference/uap:Rotation", NS).get("Preference") == "portrait"

    def test_access_rules_in_order(self, descriptor: PackageDescriptor) -> None:
        root = ET.fromstring(descriptor.to_xml())
        rules = root.findall("f:Applications/f:Application/uap:ApplicationContentUriRules/uap:Rule", NS)

        assert [(r.get("Match"), r.get("WindowsRuntimeAccess"), r.get("Type")) for r in rules] == [
            ("https://api.example.com/", "none", "include"),
            ("https://example.com/", "all", "include"),
        ]

    def test_fixed_capabilities(self, descriptor: PackageDescriptor) -> None:
        root = ET.fromstring(descriptor.to_xml())
        capabilities = root.find("f:Capabilities", NS)

        assert [c.get("Name") for c in capabilities.findall("f:Capability", NS)] == [
            "internetClient",
            "privateNetworkClientServer",
        ]
        assert [c.get("Name") for c in capabilities.findall("f:DeviceCapability", NS)] == [
            "microphone",
            "location",
            "webcam",
        ]

    def test_markup_is_escaped(self, descriptor: PackageDescriptor) -> None:
        hostile = replace(
            descriptor,
            display_name='<script>alert("x")</script> & co',
            description="bad\x01char",
        )
        xml = hostile.to_xml()

        assert b"<script>" not in xml
        assert b"&lt;script&gt;" in xml
        root = ET.fromstring(xml)
        assert root.findtext("f:Properties/f:DisplayName", namespaces=NS) == '<script>alert("x")</script> & co'
        visual = root.find("f:Applications/f:Application/uap:VisualElements", NS)
        assert visual.get("Description") == "badchar"

    def test_write(self, descriptor: PackageDescriptor, tmp_path: Path) -> None:
        path = descriptor.write(tmp_path / "out" / "AppxManifest.xml")

        assert path.read_bytes() == descriptor.to_xml()

    def test_unindented(self, descriptor: PackageDescriptor) -> None:
        assert b"\n  <" not in descriptor.to_xml(indent=False)
