"""Remote service adapters."""
