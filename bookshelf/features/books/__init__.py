"""Books and authors: models, repositories, service and seed data."""
