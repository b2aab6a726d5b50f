"""Compile data model schemas into access rules, index manifests and reports."""
