"""Resource lookup store access (PostgreSQL via psycopg2)."""
