"""
Content negotiation and rendering.

Views declare the media types they can produce; the Accept header picks
one (406 when none fits). JSON is rendered with Django's JSON encoder and
XML with ``SimplerXMLGenerator``.

Vendor media types carry two orthogonal options:
- ``full`` / ``friendly``: which company representation to use
- ``hateoas``: whether ``links`` are embedded in the body
"""

from dataclasses import dataclass
from datetime import date, datetime
from io import StringIO
from typing import Any, Iterable, Optional, Sequence

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.xmlutils import SimplerXMLGenerator


JSON = "application/json"
XML = "application/xml"
HATEOAS = "application/vnd.company.hateoas+json"
FRIENDLY = "application/vnd.company.friendly+json"
FRIENDLY_HATEOAS = "application/vnd.company.friendly.hateoas+json"
FULL = "application/vnd.company.full+json"
FULL_HATEOAS = "application/vnd.company.full.hateoas+json"

PROBLEM_JSON = "application/problem+json"
MERGE_PATCH_JSON = "application/merge-patch+json"

# Plain representations first so that */* and a missing Accept pick JSON
DEFAULT_TYPES = (JSON, XML)
COLLECTION_TYPES = (JSON, XML, HATEOAS)
COMPANY_TYPES = (JSON, XML, HATEOAS, FRIENDLY, FRIENDLY_HATEOAS, FULL, FULL_HATEOAS)


class NotAcceptable(Exception):
    """No producible media type satisfies the Accept header."""

    def __init__(self, accept: str, available: Sequence[str]):
        self.accept = accept
        self.available = tuple(available)
        super().__init__(f"Cannot produce any of '{accept}' (available: {', '.join(available)})")


class UnsupportedMediaType(Exception):
    """The request body has a media type the endpoint does not accept."""

    def __init__(self, content_type: str, supported: Sequence[str]):
        self.content_type = content_type
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported media type '{content_type or '(none)'}' "
            f"(use {', '.join(supported)})"
        )


@dataclass(frozen=True)
class Representation:
    """The negotiated media type and the options it encodes."""

    media_type: str

    @property
    def is_xml(self) -> bool:
        return self.media_type == XML

    @property
    def include_links(self) -> bool:
        return "hateoas" in self.media_type

    @property
    def full(self) -> bool:
        return ".full" in self.media_type


def negotiate(request: HttpRequest, available: Sequence[str] = DEFAULT_TYPES) -> Representation:
    """
    Pick the representation for ``request``.

    Raises:
        NotAcceptable: If no type in ``available`` is acceptable
    """
    media_type = request.get_preferred_type(list(available))
    if media_type is None:
        raise NotAcceptable(request.headers.get("Accept", ""), available)
    return Representation(media_type)


def require_content_type(request: HttpRequest, supported: Iterable[str] = (JSON,)) -> None:
    """
    Raises:
        UnsupportedMediaType: If the body is not one of ``supported``
    """
    supported = tuple(supported)
    if request.content_type not in supported:
        raise UnsupportedMediaType(request.content_type, supported)


def _write_xml(xml: SimplerXMLGenerator, name: str, value: Any) -> None:
    if isinstance(value, dict):
        xml.startElement(name, {})
        for key, item in value.items():
            _write_xml(xml, key, item)
        xml.endElement(name)
    elif isinstance(value, (list, tuple)):
        xml.startElement(name, {})
        for item in value:
            _write_xml(xml, _item_name(name), item)
        xml.endElement(name)
    elif value is None:
        xml.addQuickElement(name, attrs={"nil": "true"})
    elif isinstance(value, bool):
        xml.addQuickElement(name, "true" if value else "false")
    elif isinstance(value, (date, datetime)):
        xml.addQuickElement(name, value.isoformat())
    else:
        xml.addQuickElement(name, str(value))


def _item_name(collection_name: str) -> str:
    if collection_name.startswith("ArrayOf"):
        return collection_name[len("ArrayOf"):]
    if collection_name.endswith("s"):
        return collection_name[:-1]
    return "item"


def render_xml(data: Any, root_name: str) -> str:
    """
    Serialize dicts/lists as XML.

    Lists get an ``ArrayOf{root_name}`` root with one ``root_name``
    element per item.
    """
    stream = StringIO()
    xml = SimplerXMLGenerator(stream, "utf-8")
    xml.startDocument()
    if isinstance(data, (list, tuple)):
        _write_xml(xml, f"ArrayOf{root_name}", data)
    else:
        _write_xml(xml, root_name, data)
    xml.endDocument()
    return stream.getvalue()


def render(
    data: Any,
    representation: Representation,
    status: int = 200,
    root_name: str = "Resource",
    headers: Optional[dict] = None,
) -> HttpResponse:
    """
    Build the response for ``data`` in the negotiated representation.

    Args:
        data: Dict or list of dicts (already shaped)
        representation: Result of :func:`negotiate`
        status: HTTP status
        root_name: XML root element name
        headers: Extra response headers
    """
    if representation.is_xml:
        return HttpResponse(
            render_xml(data, root_name),
            status=status,
            content_type=f"{XML}; charset=utf-8",
            headers=headers,
        )

    return JsonResponse(
        data,
        safe=False,
        status=status,
        content_type=representation.media_type,
        headers=headers,
    )
