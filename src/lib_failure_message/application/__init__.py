"""Application layer: ports and the capture use case."""
