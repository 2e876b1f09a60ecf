"""Snapshot export and reload."""

from blogkit.storage.export import export_snapshot, load_snapshot, read_documents_jsonl

__all__ = ["export_snapshot", "load_snapshot", "read_documents_jsonl"]
