"""Domain layer: song queue and admin access."""
