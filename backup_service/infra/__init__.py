"""Infrastructure: database connections, exporters, object storage, logging."""
