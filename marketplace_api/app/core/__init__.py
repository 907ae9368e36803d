"""Settings, logging and database helpers shared by the whole service."""
