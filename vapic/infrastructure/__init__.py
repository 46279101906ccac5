"""Infrastructure: backing store adapters."""
