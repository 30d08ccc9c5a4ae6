"""HR dashboard: authenticated API client and session manager for the HR backend."""
