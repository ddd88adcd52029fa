"""Event Management bounded context."""
