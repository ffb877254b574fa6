"""Readers for DLC spreadsheet exports."""
