"""Shared parsing utilities for FundsXML ingestion."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Iterable
import hashlib

from lxml import etree


def ensure_bytes(source: BytesIO | Path | bytes | str) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, str):
        source = Path(source)
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def iter_children(element: etree._Element | None, name: str) -> Iterable[etree._Element]:
    if element is None:
        return
    for child in element:
        if isinstance(child.tag, str) and local_name(child) == name:
            yield child


def find_path(element: etree._Element | None, path: str) -> etree._Element | None:
    """Follow a ``/``-separated path of local names, taking the first match at each step."""
    current = element
    for name in path.split("/"):
        current = next(iter_children(current, name), None)
        if current is None:
            return None
    return current


def find_all(element: etree._Element | None, path: str) -> list[etree._Element]:
    """Collect every element reachable through a ``/``-separated path of local names."""
    current = [] if element is None else [element]
    for name in path.split("/"):
        current = [child for parent in current for child in iter_children(parent, name)]
    return current


def text_of(element: etree._Element | None) -> str | None:
    if element is None:
        return None
    return "".join(element.itertext())


def find_text(element: etree._Element | None, path: str) -> str | None:
    return text_of(find_path(element, path))
