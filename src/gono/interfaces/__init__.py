"""User-facing interfaces for gono."""
