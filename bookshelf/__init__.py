"""bookshelf: GraphQL API over a books and authors catalogue."""

__version__ = "0.1.0"
