"""Infrastructure: persistence, cache, messaging, security, service adapters."""
