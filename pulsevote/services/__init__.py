"""Business logic: authentication, access control and polls."""
