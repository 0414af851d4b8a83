"""Core infrastructure: settings, logging and the quote store."""
