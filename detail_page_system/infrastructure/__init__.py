"""Infrastructure: LLM providers and structured logging."""
