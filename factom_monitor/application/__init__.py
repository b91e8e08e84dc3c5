"""Application Layer - orchestrates the client, tracker and broadcaster."""
