"""Conversion services: classification, record synthesis, orchestration."""
