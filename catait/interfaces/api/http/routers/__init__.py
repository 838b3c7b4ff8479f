"""Feature routers (cards, auth, admin users)."""
