"""Infrastructure layer — file access for implementation-guide sources."""
