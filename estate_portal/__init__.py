"""Estate portal backend-for-frontend: listings, moderation and status tracking."""
