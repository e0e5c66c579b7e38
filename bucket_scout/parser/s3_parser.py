# File: bucket_scout/parser/s3_parser.py
"""bucket_scout.parser.s3_parser: classification of S3 listing responses.

The provider answers a bucket listing request with one of two XML documents::

    <ListBucketResult>…<Contents><Key>a.txt</Key></Contents>…</ListBucketResult>
    <Error><Code>AccessDenied</Code>…</Error>

:func:`classify` maps such a body to an :class:`Outcome`. It is a pure
function: the same body always gives an equal outcome.
"""

from __future__ import annotations

from typing import Optional, Tuple

from lxml import etree

from bucket_scout.prober.models import Outcome, OutcomeKind

__all__ = ("MalformedResponse", "classify", "list_keys")

_ERROR_CODES = {
    "NoSuchKey": OutcomeKind.KEY_NOT_FOUND,
    "AccessDenied": OutcomeKind.ACCESS_DENIED,
    "NoSuchBucket": OutcomeKind.NOT_FOUND,
}


class MalformedResponse(ValueError):
    """The response body is not well-formed XML."""


def _parse(body: str) -> etree._Element:
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(body.encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedResponse(f"Invalid XML response: {exc}") from exc
    return root


def _localname(element: etree._Element) -> str:
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def _child_text(element: etree._Element, name: str) -> Optional[str]:
    child = element.find(f"{{*}}{name}")
    if child is None:
        return None
    return child.text or ""


def _keys(root: etree._Element) -> Tuple[str, ...]:
    return tuple(
        key.text for key in root.iterfind("{*}Contents/{*}Key") if key.text
    )


def list_keys(body: str) -> Tuple[str, ...]:
    """Returns the object keys of a ``ListBucketResult`` body (empty otherwise)."""
    if not body.strip():
        return ()
    root = _parse(body)
    if _localname(root) != "ListBucketResult":
        return ()
    return _keys(root)


def classify(body: str) -> Outcome:
    """Classifies a raw response body.

    Raises :class:`MalformedResponse` when *body* is not empty and not XML.
    """
    if not body.strip():
        return Outcome(OutcomeKind.NO_DATA)

    root = _parse(body)
    name = _localname(root)

    if name == "ListBucketResult":
        return Outcome(OutcomeKind.FOUND, keys=_keys(root))

    if name != "Error":
        return Outcome(OutcomeKind.NO_DATA)

    code = _child_text(root, "Code")
    if code is None:
        return Outcome(OutcomeKind.NO_DATA)
    code = code.strip()

    if code in _ERROR_CODES:
        return Outcome(_ERROR_CODES[code], code=code)

    if code == "PermanentRedirect":
        endpoint = _child_text(root, "Endpoint")
        if endpoint is None:
            return Outcome(OutcomeKind.REDIRECT_UNRESOLVED, code=code)
        return Outcome(OutcomeKind.REDIRECTED, code=code, endpoint=endpoint)

    return Outcome(OutcomeKind.UNKNOWN_ERROR_CODE, code=code)
