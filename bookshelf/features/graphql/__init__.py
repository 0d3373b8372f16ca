"""GraphQL API: schema, resolvers, DataLoaders and the FastAPI router."""
