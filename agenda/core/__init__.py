"""Pure decision logic shared by the services (no I/O)."""
