"""GraphQL API: schema, types and resolvers for the catalog."""
