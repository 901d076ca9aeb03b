"""
Pytest configuration for unit tests.

Provides node-set document builders and keeps the config singleton from
leaking between tests.
"""

import base64
import os
from types import SimpleNamespace
from typing import Optional
from xml.sax.saxutils import escape

import pytest

from nodeset_extract.config import ExtractorConfig, reset_config


UANODESET_NS = "http://opcfoundation.org/UA/2011/03/UANodeSet.xsd"
UATYPES_NS = "http://opcfoundation.org/UA/2008/02/Types.xsd"

# Binary dictionary content with bytes that are not valid UTF-8
DICTIONARY_BYTES = (
    b'<opc:TypeDictionary xmlns:opc="http://opcfoundation.org/BinarySchema/">'
    + bytes(range(256)) * 4
    + b'</opc:TypeDictionary>'
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Reset the config singleton and drop NODESET_* overrides for each test."""
    for key in list(os.environ):
        if key.upper().startswith('NODESET_'):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> ExtractorConfig:
    """Default config (UANodeSet element names)."""
    return ExtractorConfig()


_QUOTE_ENTITY = {'"': '&quot;'}


def _attr(name: str, value: Optional[str]) -> str:
    if value is None:
        return ''
    return f' {name}="{escape(value, _QUOTE_ENTITY)}"'


def datatype_node(node_id: Optional[str], display_name: Optional[str]) -> str:
    """A UADataType element; None leaves the attribute/child out."""
    display = '' if display_name is None else (
        f'<DisplayName>{escape(display_name)}</DisplayName>'
    )
    return (
        f'  <UADataType{_attr("NodeId", node_id)} BrowseName="1:Type">\n'
        f'    {display}\n'
        f'    <References><Reference ReferenceType="HasSubtype" IsForward="false">i=22</Reference></References>\n'
        f'    <Definition Name="1:Type"><Field Name="Value" DataType="i=6"/></Definition>\n'
        f'  </UADataType>\n'
    )


def variable_node(
    node_id: Optional[str],
    display_name: str = 'TypeDictionary',
    payload: Optional[str] = None
) -> str:
    """A UAVariable element; payload is the raw ByteString text."""
    value = '' if payload is None else (
        f'<Value><uax:ByteString>{payload}</uax:ByteString></Value>'
    )
    return (
        f'  <UAVariable{_attr("NodeId", node_id)} BrowseName="3:TypeDictionary" DataType="ByteString">\n'
        f'    <DisplayName>{escape(display_name)}</DisplayName>\n'
        f'    <References><Reference ReferenceType="HasComponent" IsForward="false">i=93</Reference></References>\n'
        f'    {value}\n'
        f'  </UAVariable>\n'
    )


def nodeset(*nodes: str, close: bool = True) -> bytes:
    """Wrap node elements into a UANodeSet document."""
    text = (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<UANodeSet xmlns="{UANODESET_NS}" xmlns:uax="{UATYPES_NS}">\n'
        '  <NamespaceUris><Uri>urn:demo:nodeset</Uri></NamespaceUris>\n'
        + ''.join(nodes)
        + ('</UANodeSet>\n' if close else '')
    )
    return text.encode('utf-8')


@pytest.fixture
def wrapped_payload() -> str:
    """DICTIONARY_BYTES as line-wrapped base64, the way node-set exports carry it."""
    return base64.encodebytes(DICTIONARY_BYTES).decode('ascii')


@pytest.fixture
def dictionary_document(wrapped_payload) -> bytes:
    """Document whose third variable holds the type dictionary."""
    return nodeset(
        datatype_node('ns=3;i=3002', 'Point'),
        variable_node('ns=3;i=6001', 'Other', payload='AAAA'),
        variable_node('ns=3;s="Other"', 'Quoted other', payload='not base64 at all!'),
        variable_node('ns=3;s="TypeDictionary"', 'Demo', payload=wrapped_payload),
        variable_node('ns=3;i=6003', 'After', payload='AAAA'),
    )


@pytest.fixture
def datatype_document() -> bytes:
    """Document with data types in a known order, one without a label."""
    return nodeset(
        datatype_node('ns=2;i=1001', 'Simple'),
        variable_node('ns=2;i=6001', 'Ignored', payload='AAAA'),
        datatype_node('ns=3;s="Demo"', 'Demo'),
        datatype_node('ns=2;i=1002', ''),
        datatype_node('ns=2;s=Motor Status', 'Motor Status'),
    )


@pytest.fixture
def build() -> SimpleNamespace:
    """Document builders for tests that need custom node-sets."""
    return SimpleNamespace(
        nodeset=nodeset,
        datatype=datatype_node,
        variable=variable_node,
        dictionary_bytes=DICTIONARY_BYTES,
    )
