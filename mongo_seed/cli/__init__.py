"""Command line interface for mongo-seed."""
