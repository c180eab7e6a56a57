"""LinkedIn job harvester: search, filter, visa enrichment, JSON dataset."""
