"""Admin dashboard news widget."""
