"""
skills/dsl_serialize.py — Serialize a Document back to slide-language text or JSON.

Wraps slidy.dsl.serializer.SlideSerializer.
"""

from slidy.dsl.models import Document, GlobalConfig, Slide
from slidy.dsl.serializer import SlideSerializer

_serializer = SlideSerializer()


def serialize(document: Document) -> str:
    """Serialize a full document to slide-language text."""
    return _serializer.serialize(document)


def serialize_slide(slide: Slide, globals_: GlobalConfig = None) -> str:
    """Serialize a single slide to slide-language text."""
    return _serializer.serialize_slide(slide, globals_)


def to_json(document: Document) -> str:
    """Dump the document model as JSON for external renderers."""
    return document.to_json()
