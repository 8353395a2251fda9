"""Environment settings adapter."""
