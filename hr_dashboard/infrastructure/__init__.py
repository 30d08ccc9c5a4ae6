"""Infrastructure: HTTP transport and durable session storage."""
