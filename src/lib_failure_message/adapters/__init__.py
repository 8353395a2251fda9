"""Adapters binding the protocol to interpreter and process resources."""
