"""Read-only product catalogue service backed by MongoDB."""
