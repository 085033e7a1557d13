"""Domain layer - provider-agnostic resource contracts and Cosmos DB rules."""
