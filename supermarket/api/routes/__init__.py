"""Route modules for the checkout API."""
