"""Schemas shared between the forum server and its clients."""
