"""
Depth-first walk over an element tree, collecting one DocRecord per
configuration key.

The walk is a single recursive function branching on the element kind:

    TypeElement  -> recurse into its members, in declaration order
    FieldElement -> is_config_key? -> resolve_field -> append to the output

Nested types are expanded in place (pre-order), so the output order is the
declaration order exposed by the host.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from doc_record import DocRecordBag
from element_model import ConfigDocError, ElementHost, ElementKind
from key_filter import is_config_key
from resolvers import resolve_field

logger = logging.getLogger(__name__)


class TraversalError(ConfigDocError):
    """Raised when the host environment fails while a member is being processed."""

    def __init__(self, message, element=None):
        super().__init__(message)
        self.element = element


class ConfigDocWalker:
    def __init__(self, host=None, resolvers=None):
        self.host = host or ElementHost()
        self.resolvers = resolvers

    def visit(self, type_element, records):
        """
        Walk a type declaration and append a record for every configuration key.

        Args:
            type_element: Type declaration to walk (nested types included)
            records: Output sequence; anything with an append() method

        Returns:
            The same output sequence

        Raises:
            TraversalError: If any host read fails (HostEnvironmentError or an
                unexpected exception from a custom host). Records
                appended before the failure are left in place.
        """
        try:
            members = self.host.nested_members_of(type_element)
        except Exception as e:
            raise TraversalError(
                f"Cannot list the members of {getattr(type_element, 'name', type_element)!r}: {e}",
                element=type_element,
            ) from e

        for member in members:
            try:
                kind = self.host.kind_of(member)
            except Exception as e:
                raise TraversalError(
                    f"Cannot determine the kind of member {member!r}: {e}",
                    element=member,
                ) from e

            if kind is ElementKind.TYPE:
                self.visit(member, records)
            elif kind is ElementKind.FIELD:
                self._visit_field(member, records)
            else:
                logger.debug(f"Ignoring member {member!r} of kind {kind}")

        return records

    def _visit_field(self, field_element, records):
        try:
            if not is_config_key(field_element, self.host):
                return
            record = resolve_field(field_element, self.host, self.resolvers)
        except Exception as e:
            raise TraversalError(
                f"Failed to process field {getattr(field_element, 'name', field_element)!r}: {e}",
                element=field_element,
            ) from e

        records.append(record)


def _walk_partial(walker, type_element):
    # Worker side of the parallel walk: never raises, so the merge can keep
    # the partial records of a failing type.
    partial = []
    try:
        walker.visit(type_element, partial)
    except Exception as e:
        return partial, e
    return partial, None


def collect_doc_records(types, records=None, host=None, workers=1, resolvers=None):
    """
    Walk several top-level types into one output sequence.

    With workers > 1 each top-level type is walked on a thread pool into its
    own partial list, and the partial lists are concatenated in input order,
    so the result is identical to the sequential walk.

    Args:
        types: Top-level type declarations, in the order to document them
        records: Output sequence (defaults to a new DocRecordBag)
        host: Host environment (defaults to ElementHost)
        workers: Number of worker threads
        resolvers: Resolver pipeline (defaults to resolvers.RESOLVERS)

    Returns:
        The output sequence

    Raises:
        TraversalError: On the first failing type. Records of the types
            before it, and the ones it produced before failing, are kept.
    """
    if records is None:
        records = DocRecordBag()

    walker = ConfigDocWalker(host, resolvers)
    types = list(types)

    if workers <= 1 or len(types) <= 1:
        for type_element in types:
            walker.visit(type_element, records)
        return records

    logger.debug(f"Walking {len(types)} types with {workers} workers")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in submission order, not completion order
        for partial, error in executor.map(lambda t: _walk_partial(walker, t), types):
            for record in partial:
                records.append(record)
            if error is not None:
                raise error

    return records
