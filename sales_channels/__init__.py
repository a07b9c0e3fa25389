"""Sales channel data-access service."""
