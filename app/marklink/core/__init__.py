"""Core configuration, state, and orchestration for marklink."""
