#!/usr/bin/env python3
"""
Configuration Key Documentation Extractor

Discovers configuration keys in an element tree and resolves their
documentation from ConfigDoc annotations and documentation comments.

Usage:
    from configdoc_extractor import ConfigDocExtractor
    from extractor_config import ExtractorConfig

    extractor = ConfigDocExtractor(ExtractorConfig.from_yaml("configdoc.yaml"))
    records = extractor.extract([config_type, other_config_type])
    payload = records.to_dict()

The returned DocRecordBag is handed to whatever renders the documentation.
"""

import logging

import resolvers
from element_model import ElementHost
from element_walker import collect_doc_records
from extractor_config import ExtractorConfig, configure_logging

logger = logging.getLogger(__name__)


class ConfigDocExtractor:
    def __init__(self, config=None, host=None):
        self.config = config or ExtractorConfig()
        self.host = host or ElementHost()

        # A non-verbose extractor leaves the application's logging setup alone
        if self.config.verbose:
            configure_logging(self.config)

    def extract(self, types, records=None):
        """
        Collect the documentation records of all configuration keys in `types`.

        The resolver debug switches are set from the config for the duration of
        the call and restored afterwards.

        Args:
            types: Top-level type declarations
            records: Optional output sequence to append to

        Returns:
            The output sequence (a new DocRecordBag unless one was given)
        """
        types = list(types)

        saved_debug = resolvers.DEBUG_RESOLVERS, resolvers.DEBUG_FILTER
        resolvers.DEBUG_RESOLVERS = self.config.debug_resolvers
        resolvers.DEBUG_FILTER = self.config.debug_filter
        try:
            records = collect_doc_records(
                types, records=records, host=self.host, workers=self.config.workers
            )
        finally:
            resolvers.DEBUG_RESOLVERS, resolvers.DEBUG_FILTER = saved_debug

        logger.info(f"Extracted {len(records)} configuration keys from {len(types)} types")
        return records
