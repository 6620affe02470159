"""PulseVote: polling API with account lockout and role-based access."""
