#!/usr/bin/env python3
"""
Configuration Key Resolvers - Documentation Metadata Pipeline

This module turns an eligible field declaration into a DocRecord by running it
through a short, ordered pipeline of resolvers. Each resolver looks at the
field (through the host environment) and fills part of a draft dict that
finally becomes the immutable record.

================================================================================
METADATA SOURCES
================================================================================

A configuration key can be documented in two independent places:

┌─────────────────────────────────────────────────────────────────────────────
│ 1. ConfigDoc ANNOTATION (structured)
│    ConfigDoc(description="Retry count", default_value="3", since="1.2")
│    - description, default_value and since are optional (blank = not provided)
│    - exclude=True removes the field from the documentation entirely
│      (handled earlier, by key_filter.is_config_key)
└─────────────────────────────────────────────────────────────────────────────
┌─────────────────────────────────────────────────────────────────────────────
│ 2. DOCUMENTATION COMMENT (free text)
│    Request timeout in ms.
│    @since 2.0
│    - the text becomes the description
│    - a "@since <version>" line becomes the since value and is stripped
└─────────────────────────────────────────────────────────────────────────────

PRECEDENCE:
- An annotation description wins. The documentation comment is then not read
  at all, so no @since extraction happens either.
- Without an annotation description, the comment supplies the description and,
  if the annotation gave no since, the since value.
- default_value only ever comes from the annotation.

================================================================================
RESOLVER EXECUTION ORDER
================================================================================

1. BasicInfoResolver       - key (the constant, verbatim) and source (enclosing type)
2. AnnotationResolver      - description, default_value, since from ConfigDoc
3. DocCommentResolver      - description and since from the documentation comment

ADDING NEW RESOLVERS:
1. Implement accepts(record, field_element, host) and parse(record, field_element, host)
2. Add the @debug_resolver decorator
3. Insert it at the right position in RESOLVERS

================================================================================
DEBUGGING
================================================================================

- DEBUG_RESOLVERS enables before/after dumps of the draft for every resolver
- DEBUG_FILTER narrows the dumps to keys containing the given text
"""

import logging
import pprint

from doc_record import DocRecord
from since_tag import extract_since

logger = logging.getLogger(__name__)

# Debug configuration - useful for development and troubleshooting
DEBUG_RESOLVERS = False  # Master switch for resolver debugging
DEBUG_FILTER = None      # Filter to specific configuration key (or None for all)


def debug_resolver(cls):
    """
    Decorator that wraps resolver parse() methods to print the draft record
    before and after each resolver runs.

    Usage:

        @debug_resolver
        class MyResolver:
            def accepts(self, record, field_element, host): ...
            def parse(self, record, field_element, host): ...
    """
    orig_parse = cls.parse

    def wrapped_parse(self, record, field_element, host):
        if not DEBUG_RESOLVERS:
            return orig_parse(self, record, field_element, host)

        key = record.get("key") or getattr(field_element, "name", "?")
        if DEBUG_FILTER and DEBUG_FILTER not in str(key):
            return orig_parse(self, record, field_element, host)

        print("\n" + "=" * 80)
        print(f"🔍 Resolver: {cls.__name__}")
        print(f"Key: {key}")
        print("Draft BEFORE:")
        pprint.pp(dict(record))

        try:
            result = orig_parse(self, record, field_element, host)
        except Exception as e:
            print(f"❌ ERROR in {cls.__name__}: {e}")
            raise

        print("Draft AFTER:")
        pprint.pp(dict(record))
        print("=" * 80 + "\n")

        return result

    cls.parse = wrapped_parse
    return cls


def not_blank(value):
    """Return the value, or None when it is missing or only whitespace."""
    if value is None or not str(value).strip():
        return None
    return value


@debug_resolver
class BasicInfoResolver:
    """
    Establish the identity of the record: the key and where it is defined.

    - key: the field's constant value, copied verbatim (never trimmed or re-cased)
    - source: the qualified name of the enclosing type, as reported by the host

    A host that cannot name the enclosing declaration raises
    HostEnvironmentError, which aborts this field.
    """

    def accepts(self, record, field_element, host):
        return True

    def parse(self, record, field_element, host):
        record["key"] = host.constant_value_of(field_element)
        record["source"] = host.enclosing_declaration_name_of(field_element)
        return record


@debug_resolver
class AnnotationResolver:
    """
    Copy description, default_value and since from the ConfigDoc annotation.

    Blank attributes count as not provided and are stored as None, so an
    annotation with since="" never hides a since found elsewhere.
    """

    def accepts(self, record, field_element, host):
        return host.annotation_of(field_element) is not None

    def parse(self, record, field_element, host):
        annotation = host.annotation_of(field_element)
        record["description"] = not_blank(annotation.description)
        record["default_value"] = not_blank(annotation.default_value)
        record["since"] = not_blank(annotation.since)
        return record


@debug_resolver
class DocCommentResolver:
    """
    Fall back to the documentation comment when no description was resolved.

    The since-marker is extracted from the comment and removed from the text;
    the captured version is used only if the annotation did not already
    provide one. A missing comment yields an empty description.
    """

    def accepts(self, record, field_element, host):
        return record.get("description") is None

    def parse(self, record, field_element, host):
        comment = host.documentation_comment_of(field_element)
        description, since = extract_since(comment)

        if since is not None and record.get("since") is None:
            record["since"] = since

        record["description"] = description.strip()
        return record


RESOLVERS = [
    BasicInfoResolver(),
    AnnotationResolver(),
    DocCommentResolver(),
]


def resolve_field(field_element, host, resolvers=None):
    """
    Build the DocRecord of a field that passed key_filter.is_config_key.

    Args:
        field_element: The field declaration
        host: Host environment used for every read
        resolvers: Resolver pipeline (None means RESOLVERS; an empty list runs no resolver)

    Returns:
        DocRecord with key, source, description (never None), default_value and since
    """
    record = {"key": None, "source": None, "description": None, "default_value": None, "since": None}

    for resolver in RESOLVERS if resolvers is None else resolvers:
        if resolver.accepts(record, field_element, host):
            resolver.parse(record, field_element, host)

    if record["description"] is None:
        record["description"] = ""

    return DocRecord(
        key=record["key"],
        source=record["source"],
        description=record["description"],
        default_value=record["default_value"],
        since=record["since"],
    )
