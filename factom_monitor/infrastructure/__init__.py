"""Infrastructure Layer - factomd client, messaging, retry policies."""
