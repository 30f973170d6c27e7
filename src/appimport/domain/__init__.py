"""Domain layer: records, ports and the import workflow."""
