"""Adapters connecting the client to transports and frameworks."""
