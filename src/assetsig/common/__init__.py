"""Shared configuration, database access, logging, errors and metrics."""
