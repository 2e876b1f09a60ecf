"""HTTP read API over published snapshots."""
