"""Long-lived services owned by the server process."""
