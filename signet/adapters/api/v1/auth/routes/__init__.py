"""Route modules of the authentication router."""
