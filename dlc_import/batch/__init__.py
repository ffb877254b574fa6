"""Batch sink writing ArchivesSpace import JSON."""
