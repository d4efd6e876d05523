import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocRecord:
    """Resolved documentation of one configuration key."""
    key: str
    source: str
    description: str
    default_value: Optional[str] = None
    since: Optional[str] = None

    def to_dict(self):
        return asdict(self)


class DocRecordBag:
    """
    Append-only, ordered container of DocRecord objects.

    Records keep the order in which the walker discovered them. Nothing is
    ever removed or replaced; two fields sharing the same constant value
    produce two records.
    """

    def __init__(self, records=None):
        self._records = []
        if records:
            self.extend(records)

    def append(self, record):
        if not isinstance(record, DocRecord):
            raise TypeError(f"Expected a DocRecord, got {type(record).__name__}")
        self._records.append(record)
        logger.debug(f"Added record for key '{record.key}' from {record.source}")

    def extend(self, records):
        for record in records:
            self.append(record)

    def keys(self):
        """Configuration keys in discovery order (duplicates included)."""
        return [record.key for record in self._records]

    def get_statistics(self):
        """Get statistics about the records in the bag"""
        stats = {
            "total_records": len(self._records),
            "with_description": 0,
            "with_default_value": 0,
            "with_since": 0,
            "by_source": defaultdict(int),
        }

        for record in self._records:
            stats["by_source"][record.source] += 1

            if record.description:
                stats["with_description"] += 1

            if record.default_value is not None:
                stats["with_default_value"] += 1

            if record.since is not None:
                stats["with_since"] += 1

        # Convert defaultdict to regular dict for JSON serialization
        stats["by_source"] = dict(stats["by_source"])

        return stats

    def to_dict(self):
        """Convert the bag to a dictionary for JSON serialization"""
        return {
            "records": [record.to_dict() for record in self._records],
            "statistics": self.get_statistics(),
        }

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __contains__(self, key):
        return any(record.key == key for record in self._records)

    def __repr__(self):
        return f"DocRecordBag({len(self._records)} records)"
