"""Convert Digital Library Collections (DLC) CSV exports to ArchivesSpace batch JSON."""

__version__ = "0.1.0"
